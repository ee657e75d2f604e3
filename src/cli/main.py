"""Command line entry point for the cpi-api service."""

from __future__ import annotations

import json

import click
import structlog
import uvicorn

from cpi_api.api import create_app
from cpi_api.config import ServiceConfig
from cpi_api.data import CpiApiError, CpiLookupService, UpstreamStatusError
from cpi_api.data.endpoints import BASE_URL
from cpi_api.logging import configure_logging

LOG_FORMAT_CHOICES = ("console", "json")
LOG_LEVEL_CHOICES = ("critical", "error", "warning", "info", "debug")

BASE_URL_HELP = "BLS timeseries endpoint queried for CPI values. May also be set via CPI_API_BASE_URL."

logger = structlog.get_logger(__name__)


def _config(ctx: click.Context) -> ServiceConfig:
    """Return the settings assembled by the command group."""
    ctx.ensure_object(dict)
    return ctx.obj["config"]


@click.group()
@click.option("--base-url", envvar="CPI_API_BASE_URL", default=BASE_URL, help=BASE_URL_HELP)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    envvar="CPI_API_TIMEOUT",
    default=30.0,
    show_default=True,
    help="Seconds to wait for the BLS API before giving up.",
)
@click.option(
    "--cache-ttl-hours",
    type=click.FloatRange(min=0, min_open=True),
    envvar="CPI_API_CACHE_TTL_HOURS",
    default=24.0,
    show_default=True,
    help="Absolute lifetime of cached CPI results.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
    envvar="CPI_API_LOG_LEVEL",
    default="info",
    show_default=True,
    help="Verbosity for structured logs.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMAT_CHOICES, case_sensitive=False),
    envvar="CPI_API_LOG_FORMAT",
    default="console",
    show_default=True,
    help="Render logs as console-friendly text or JSON.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    base_url: str,
    timeout: float,
    cache_ttl_hours: float,
    log_level: str,
    log_format: str,
) -> None:
    """Serve and query monthly CPI values from the BLS API."""
    configure_logging(level=log_level, json_output=log_format.lower() == "json")
    ctx.ensure_object(dict)
    ctx.obj["config"] = ServiceConfig(
        base_url=base_url,
        timeout=timeout,
        cache_ttl_hours=cache_ttl_hours,
    )
    logger.bind(command_group="cpi-api").debug(
        "cli.initialized",
        base_url=base_url,
        timeout=timeout,
        cache_ttl_hours=cache_ttl_hours,
        log_level=log_level.lower(),
        log_format=log_format.lower(),
    )


@cli.command("serve")
@click.option("--host", envvar="CPI_API_HOST", default="127.0.0.1", show_default=True)
@click.option("--port", envvar="CPI_API_PORT", type=int, default=8000, show_default=True)
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Run the HTTP API with uvicorn."""
    config = _config(ctx)
    logger.info("command.start", command="serve", host=host, port=port)
    uvicorn.run(create_app(config=config), host=host, port=port, log_config=None)


@cli.command("lookup")
@click.option("--year", required=True, help="Four-digit year, e.g. 2020.")
@click.option("--month", required=True, help="Full month name, e.g. January.")
@click.pass_context
def lookup(ctx: click.Context, year: str, month: str) -> None:
    """Fetch one month's CPI value and print it as JSON."""
    cmd_log = logger.bind(command="lookup", year=year, month=month)
    cmd_log.info("command.start")
    service = CpiLookupService.from_config(_config(ctx))
    try:
        data = service.lookup(month, year)
    except UpstreamStatusError as exc:
        raise click.ClickException(f"BLS API returned status {exc.status_code}.") from exc
    except CpiApiError as exc:
        raise click.ClickException(exc.message) from exc
    finally:
        service.close()
    click.echo(json.dumps(data.to_dict(), indent=2))
    if not data.found:
        ctx.exit(1)


if __name__ == "__main__":  # pragma: no cover
    cli()
