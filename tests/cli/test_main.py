"""CLI tests driven through click's CliRunner."""

import json

from click.testing import CliRunner

import cli.main as cli_mod
from cpi_api.data.errors import UpstreamStatusError
from tests.conftest import bls_body, entry


def _use_service(monkeypatch, service):
    monkeypatch.setattr(cli_mod.CpiLookupService, "from_config", classmethod(lambda cls, config: service))


def test_lookup_prints_json(monkeypatch, service, fake_client):
    fake_client.responses = [bls_body([entry(value="250", footnotes=[{"text": "Preliminary"}])])]
    _use_service(monkeypatch, service)

    r = CliRunner().invoke(
        cli_mod.cli, ["--log-level", "critical", "lookup", "--year", "2020", "--month", "january"]
    )

    assert r.exit_code == 0, r.output
    assert json.loads(r.output) == {"value": 250, "notes": {"footnotes": ["Preliminary"]}}
    assert fake_client.closed


def test_lookup_not_found_exits_nonzero(monkeypatch, service, fake_client):
    fake_client.responses = [bls_body([])]
    _use_service(monkeypatch, service)

    r = CliRunner().invoke(
        cli_mod.cli, ["--log-level", "critical", "lookup", "--year", "2020", "--month", "March"]
    )

    assert r.exit_code == 1
    assert json.loads(r.output)["value"] is None


def test_lookup_reports_validation_errors(monkeypatch, service):
    _use_service(monkeypatch, service)

    r = CliRunner().invoke(cli_mod.cli, ["lookup", "--year", "99", "--month", "June"])

    assert r.exit_code == 1
    assert "Invalid Year" in r.output


def test_lookup_reports_upstream_status(monkeypatch, service, fake_client):
    fake_client.responses = [UpstreamStatusError(503)]
    _use_service(monkeypatch, service)

    r = CliRunner().invoke(cli_mod.cli, ["lookup", "--year", "2020", "--month", "June"])

    assert r.exit_code == 1
    assert "503" in r.output


def test_group_builds_config_from_env(monkeypatch):
    captured = {}

    def fake_from_config(cls, config):
        captured["config"] = config
        raise SystemExit(0)

    monkeypatch.setattr(cli_mod.CpiLookupService, "from_config", classmethod(fake_from_config))
    r = CliRunner().invoke(
        cli_mod.cli,
        ["lookup", "--year", "2020", "--month", "May"],
        env={"CPI_API_BASE_URL": "https://bls.test/data", "CPI_API_TIMEOUT": "4", "CPI_API_CACHE_TTL_HOURS": "6"},
    )

    assert r.exit_code == 0
    config = captured["config"]
    assert config.base_url == "https://bls.test/data"
    assert config.timeout == 4.0
    assert config.cache_ttl_hours == 6.0


def test_serve_runs_uvicorn(monkeypatch):
    calls = {}

    def fake_run(app, **kwargs):
        calls["app"] = app
        calls.update(kwargs)

    monkeypatch.setattr(cli_mod.uvicorn, "run", fake_run)
    r = CliRunner().invoke(cli_mod.cli, ["--log-format", "json", "serve", "--port", "9000"])

    assert r.exit_code == 0, r.output
    assert calls["port"] == 9000
    assert calls["host"] == "127.0.0.1"
    assert calls["app"].title == "CPI Lookup API"


def test_rejects_unknown_log_level():
    r = CliRunner().invoke(cli_mod.cli, ["--log-level", "verbose", "serve"])
    assert r.exit_code == 2
