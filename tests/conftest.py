"""Global test configuration and fixtures."""

import json
import logging
from dataclasses import dataclass, field
from datetime import timedelta

import pytest
import structlog
from fastapi.testclient import TestClient

from cpi_api.api import create_app
from cpi_api.data.cache import CpiCache, TTLCache
from cpi_api.data.service import CpiLookupService
from cpi_api.logging import HANDLER_NAME


def bls_body(entries, *, status="REQUEST_SUCCEEDED"):
    """Render a BLS timeseries response holding one series with *entries*."""
    return json.dumps(
        {
            "status": status,
            "Results": {"series": [{"seriesID": "LAUCN040010000000005", "data": entries}]},
        }
    )


def entry(year="2020", period_name="January", value="250", footnotes=None):
    """A single BLS data point; ``footnotes=None`` omits the key entirely."""
    raw = {"year": year, "period": "M01", "periodName": period_name, "value": value}
    if footnotes is not None:
        raw["footnotes"] = footnotes
    return raw


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta.total_seconds()


@dataclass
class FakeBlsClient:
    """Stand-in for CpiHttpClient that replays canned bodies and counts calls."""

    responses: list = field(default_factory=list)
    calls: list = field(default_factory=list)
    contexts: list = field(default_factory=list)
    closed: bool = False
    base_url: str = "https://bls.test/data"

    def fetch_year(self, year: int) -> str:
        self.calls.append(year)
        self.contexts.append(structlog.contextvars.get_contextvars())
        outcome = self.responses[min(len(self.calls), len(self.responses)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_client():
    return FakeBlsClient()


@pytest.fixture
def service(fake_client, clock):
    return CpiLookupService(client=fake_client, cache=CpiCache(store=TTLCache(clock=clock)))


@pytest.fixture
def api(service):
    with TestClient(create_app(service=service)) as client:
        yield client


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging so handlers never outlive the stream they wrap."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
    root.setLevel(level)
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
