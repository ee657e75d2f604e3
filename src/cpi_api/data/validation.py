"""Input checks performed before any upstream call is made."""

import re

MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_MONTH_LOOKUP = {name.lower(): name for name in MONTH_NAMES}

INVALID_MONTH_MESSAGE = "Invalid month name."
INVALID_YEAR_MESSAGE = "Invalid Year. It must be a 4-digit number between 1000 and 9999."

_YEAR_PATTERN = re.compile(r"[0-9]{4}")
MIN_YEAR = 1000
MAX_YEAR = 9999


def canonical_month(month: str) -> str | None:
    """Return the title-case month name, or ``None`` when *month* is not one."""
    if not isinstance(month, str):
        return None
    return _MONTH_LOOKUP.get(month.lower())


def parse_year(year: int | str) -> int | None:
    """Return *year* as an int when it is exactly four digits in range."""
    if isinstance(year, bool):
        return None
    text = str(year)
    if not _YEAR_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if not MIN_YEAR <= value <= MAX_YEAR:
        return None
    return value


def validate_month_year(month: str, year: int | str) -> tuple[bool, str]:
    """Check a lookup request.

    Returns ``(True, "")`` when both inputs are usable. Otherwise returns
    ``False`` with every failure message joined by a space, so one response
    can report a bad month and a bad year together.
    """
    problems: list[str] = []
    if canonical_month(month) is None:
        problems.append(INVALID_MONTH_MESSAGE)
    if parse_year(year) is None:
        problems.append(INVALID_YEAR_MESSAGE)
    return not problems, " ".join(problems)


__all__ = [
    "INVALID_MONTH_MESSAGE",
    "INVALID_YEAR_MESSAGE",
    "MONTH_NAMES",
    "canonical_month",
    "parse_year",
    "validate_month_year",
]
