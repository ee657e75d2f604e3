"""Lookup, parsing, and caching of BLS CPI data points."""

from .cache import CpiCache, TTLCache
from .client import CpiHttpClient
from .errors import (
    CpiApiError,
    CpiNotFound,
    EntryNotFound,
    SeriesDataNotFound,
    UpstreamConnectionError,
    UpstreamParseError,
    UpstreamShapeError,
    UpstreamStatusError,
    ValidationError,
)
from .models import CPIData, CPIEntry, CPIQuery, FootNotes
from .service import CpiLookupService
from .validation import validate_month_year

__all__ = [
    "CPIData",
    "CPIEntry",
    "CPIQuery",
    "CpiApiError",
    "CpiCache",
    "CpiHttpClient",
    "CpiLookupService",
    "CpiNotFound",
    "EntryNotFound",
    "FootNotes",
    "SeriesDataNotFound",
    "TTLCache",
    "UpstreamConnectionError",
    "UpstreamParseError",
    "UpstreamShapeError",
    "UpstreamStatusError",
    "ValidationError",
    "validate_month_year",
]
