"""Runtime settings for the CPI API."""

from datetime import timedelta

from attrs import define, field, validators

from .data.endpoints import BASE_URL, CACHE_TTL


@define(slots=True, frozen=True)
class ServiceConfig:
    """Settings shared by the HTTP app and the CLI."""

    base_url: str = BASE_URL
    timeout: float = field(default=30.0, converter=float, validator=validators.gt(0))
    cache_ttl_hours: float = field(
        default=CACHE_TTL.total_seconds() / 3600,
        converter=float,
        validator=validators.gt(0),
    )
    user_agent: str = "cpi-api/0.1"

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(hours=self.cache_ttl_hours)


__all__ = ["ServiceConfig"]
