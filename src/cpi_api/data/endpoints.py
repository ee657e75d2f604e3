"""Constants describing the upstream BLS endpoint and cache policy."""

from datetime import timedelta

BASE_URL = "https://api.bls.gov/publicAPI/v1/timeseries/data/LAUCN040010000000005"

CACHE_KEY_PREFIX = "CPI"
CACHE_TTL = timedelta(hours=24)


def year_query(year: int) -> dict[str, str]:
    """Query parameters restricting the upstream window to a single year."""
    return {"startYear": str(year), "endYear": str(year)}


def cache_key(year: int, month: str) -> str:
    """Build the cache key for a (year, month) lookup."""
    return f"{CACHE_KEY_PREFIX}_{year}_{month}"
