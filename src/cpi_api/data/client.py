"""HTTP client for the BLS public timeseries API."""

import requests
import structlog
from attrs import define, field

from .endpoints import BASE_URL, year_query
from .errors import UpstreamConnectionError, UpstreamStatusError

logger = structlog.get_logger(__name__)


@define(slots=True)
class CpiHttpClient:
    """Thin HTTP wrapper around the BLS timeseries data endpoint."""

    base_url: str = BASE_URL
    timeout: float = 30.0
    session: requests.Session = field(factory=requests.Session)
    headers: dict[str, str] = field(
        factory=lambda: {
            "User-Agent": "cpi-api/0.1",
            "Accept": "application/json,text/plain,*/*;q=0.1",
        },
    )

    def fetch_year(self, year: int) -> str:
        """Fetch the single-year window for *year* and return the raw body."""
        params = year_query(year)
        log = logger.bind(url=self.base_url, year=year)
        log.debug("http.fetch_start", timeout=self.timeout)
        try:
            response = self.session.get(
                self.base_url, params=params, timeout=self.timeout, headers=self.headers
            )
        except requests.RequestException as exc:
            log.error("http.fetch_unreachable", error=str(exc))
            raise UpstreamConnectionError() from exc
        # Only 2xx counts; unfollowed redirects are failures too.
        if not 200 <= response.status_code < 300:
            log.error("http.fetch_failed", status=response.status_code)
            raise UpstreamStatusError(response.status_code)
        log.debug("http.fetch_success", bytes=len(response.content))
        return response.text

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()
        logger.debug("http.session_closed")


__all__ = ["CpiHttpClient"]
