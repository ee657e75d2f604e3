"""FastAPI application exposing ``GET /GetCPI``."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from .. import __version__
from ..config import ServiceConfig
from ..data.errors import (
    CpiApiError,
    UpstreamConnectionError,
    UpstreamParseError,
    UpstreamShapeError,
    UpstreamStatusError,
    ValidationError,
)
from ..data.service import CpiLookupService
from ..logging import request_context

logger = structlog.get_logger(__name__)


def get_service(request: Request) -> CpiLookupService:
    return request.app.state.service


async def _plain_400(request: Request, exc: CpiApiError) -> Response:
    return PlainTextResponse(exc.message, status_code=400)


async def _upstream_status(request: Request, exc: UpstreamStatusError) -> Response:
    return Response(status_code=exc.status_code)


async def _upstream_unreachable(request: Request, exc: UpstreamConnectionError) -> Response:
    return PlainTextResponse(exc.message, status_code=502)


def create_app(
    service: Optional[CpiLookupService] = None,
    config: Optional[ServiceConfig] = None,
) -> FastAPI:
    """Build the API around *service*, or a fresh one wired from *config*."""
    if service is None:
        service = CpiLookupService.from_config(config or ServiceConfig())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("api.startup", base_url=app.state.service.client.base_url)
        yield
        app.state.service.close()
        logger.info("api.shutdown")

    app = FastAPI(title="CPI Lookup API", version=__version__, lifespan=lifespan)
    app.state.service = service

    # Parse and shape failures share the 400 plain-text response.
    app.add_exception_handler(ValidationError, _plain_400)
    app.add_exception_handler(UpstreamParseError, _plain_400)
    app.add_exception_handler(UpstreamShapeError, _plain_400)
    app.add_exception_handler(UpstreamStatusError, _upstream_status)
    app.add_exception_handler(UpstreamConnectionError, _upstream_unreachable)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.get("/GetCPI")
    def get_cpi(
        year: Optional[str] = Query(default=None, description="Four-digit year, e.g. 2020"),
        month: Optional[str] = Query(default=None, description="Full month name, e.g. January"),
        service: CpiLookupService = Depends(get_service),
    ) -> Response:
        """Return the CPI value and footnotes for one month."""
        with request_context(path="/GetCPI", year=year, month=month):
            data = service.lookup(month, year)
            status = 200 if data.found else 404
            logger.info("request.completed", status=status, value=data.value)
        return JSONResponse(data.to_dict(), status_code=status)

    return app


__all__ = ["create_app", "get_service"]
