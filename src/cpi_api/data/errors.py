"""Exception taxonomy for CPI lookups.

Every error carries a ``message`` that is safe to return to API callers.
HTTP status mapping happens in :mod:`cpi_api.api.app`.
"""


class CpiApiError(Exception):
    """Base class for all CPI lookup failures."""

    default_message = "CPI lookup failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CpiApiError):
    """Caller supplied a malformed month or year."""

    default_message = "Invalid request."


class UpstreamStatusError(CpiApiError):
    """BLS answered with a non-success HTTP status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"Error response from BLS API. Status code: {status_code}")


class UpstreamConnectionError(CpiApiError):
    """The BLS API could not be reached at all."""

    default_message = "Error contacting BLS API"


class UpstreamParseError(CpiApiError):
    """The upstream body was not valid JSON."""

    default_message = "Error parsing API response"


class UpstreamShapeError(CpiApiError):
    """Valid JSON that lacks the ``Results.series`` structure."""

    default_message = "Invalid or empty response from BLS API."


class CpiNotFound(CpiApiError):
    """Well-formed response without a usable data point.

    Not a failure: the service turns it into a :class:`CPIData` with no value.
    """

    default_message = "CPI data not found"


class SeriesDataNotFound(CpiNotFound):
    """The first series carries no ``data`` array."""

    default_message = "No data found in the series"


class EntryNotFound(CpiNotFound):
    """No usable entry matches the requested month and year."""


__all__ = [
    "CpiApiError",
    "CpiNotFound",
    "EntryNotFound",
    "SeriesDataNotFound",
    "UpstreamConnectionError",
    "UpstreamParseError",
    "UpstreamShapeError",
    "UpstreamStatusError",
    "ValidationError",
]
