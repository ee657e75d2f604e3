"""Orchestration for a single CPI lookup: validate, consult cache, fetch, parse."""

from typing import TYPE_CHECKING

import structlog
from attrs import define, field

from . import parser
from .cache import CpiCache, TTLCache
from .client import CpiHttpClient
from .endpoints import cache_key
from .errors import CpiNotFound, ValidationError
from .models import CPIData, CPIQuery
from .validation import canonical_month, parse_year, validate_month_year

if TYPE_CHECKING:
    from ..config import ServiceConfig

logger = structlog.get_logger(__name__)


@define(slots=True)
class CpiLookupService:
    """Serve CPI values for single months, caching each (year, month) result."""

    client: CpiHttpClient = field(factory=CpiHttpClient)
    cache: CpiCache = field(factory=CpiCache)

    @classmethod
    def from_config(cls, config: "ServiceConfig") -> "CpiLookupService":
        """Wire a service with a real HTTP client and a fresh in-memory cache."""
        client = CpiHttpClient(base_url=config.base_url, timeout=config.timeout)
        client.headers["User-Agent"] = config.user_agent
        return cls(client=client, cache=CpiCache(store=TTLCache(), ttl=config.cache_ttl))

    def build_query(self, month: str, year: int | str) -> CPIQuery:
        """Validate raw request input, raising :class:`ValidationError` on failure."""
        ok, message = validate_month_year(month, year)
        if not ok:
            logger.info("request.invalid", month=month, year=year, reason=message)
            raise ValidationError(message)
        return CPIQuery(year=parse_year(year), month=canonical_month(month))

    def lookup(self, month: str, year: int | str) -> CPIData:
        """Return the CPI value for *month* of *year*.

        Not-found outcomes come back as :class:`CPIData` without a value and
        are cached like any other result. Upstream failures raise and are
        never cached.
        """
        query = self.build_query(month, year)
        key = cache_key(query.year, query.month)
        return self.cache.get_or_compute(key, lambda: self._fetch(query))

    def _fetch(self, query: CPIQuery) -> CPIData:
        log = logger.bind(year=query.year, month=query.month)
        log.debug("lookup.fetch_start")
        text = self.client.fetch_year(query.year)
        try:
            result = parser.build_cpi_data(text, query)
        except CpiNotFound as exc:
            log.warning("lookup.not_found", reason=exc.message)
            return CPIData.not_found(exc.message)
        log.debug("lookup.fetch_complete", value=result.value, footnotes=len(result.notes))
        return result

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()


__all__ = ["CpiLookupService"]
