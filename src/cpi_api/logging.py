"""structlog setup shared by the API server and the CLI.

Application events and the stdlib records emitted by uvicorn and FastAPI are
rendered by one :class:`structlog.stdlib.ProcessorFormatter`, so a running
server produces a single log stream. Per-request fields are carried through
:mod:`structlog.contextvars`.
"""

from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from structlog.types import Processor

LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

# uvicorn.run(..., log_config=None) leaves these unconfigured.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi")

HANDLER_NAME = "cpi_api"


def _level_value(level: str) -> int:
    normalized = level.lower()
    if normalized not in LOG_LEVELS:
        valid = ", ".join(sorted(LOG_LEVELS))
        raise ValueError(f"Unsupported log level {level!r}. Choose one of: {valid}.")
    return LOG_LEVELS[normalized]


def _shared_processors() -> list[Processor]:
    """Steps applied to structlog events and foreign stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def _build_handler(*, json_output: bool) -> logging.Handler:
    render_steps: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if json_output:
        render_steps += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    else:
        render_steps.append(structlog.dev.ConsoleRenderer())

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=render_steps,
        )
    )
    return handler


def configure_logging(
    level: str = "info",
    *,
    json_output: bool = False,
) -> logging.Handler:
    """Route application and server logs through one structlog renderer.

    Calling it again replaces the handler installed by the previous call.
    Returns the installed root handler.
    """
    level_value = _level_value(level)
    handler = _build_handler(json_output=json_output)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level_value)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
        server_logger.setLevel(level_value)

    structlog.configure(
        processors=_shared_processors() + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return handler


@contextmanager
def request_context(**fields: object) -> Iterator[str]:
    """Bind a fresh ``request_id`` plus *fields* for the duration of a request."""
    request_id = uuid.uuid4().hex[:12]
    with structlog.contextvars.bound_contextvars(request_id=request_id, **fields):
        yield request_id


__all__ = ["HANDLER_NAME", "LOG_LEVELS", "SERVER_LOGGERS", "configure_logging", "request_context"]
