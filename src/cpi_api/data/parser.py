"""Parsers for BLS timeseries JSON payloads.

Each stage either returns the next level of the document or raises a
distinct error from :mod:`cpi_api.data.errors`, so callers and tests can
target every failure branch on its own.
"""

import json
from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

import marshmallow as ma
import structlog

from .errors import EntryNotFound, SeriesDataNotFound, UpstreamParseError, UpstreamShapeError
from .models import CPIData, CPIEntry, CPIEntrySchema, CPIQuery, FootNotes

logger = structlog.get_logger(__name__)

_entry_schema = CPIEntrySchema()


def load_payload(text: str) -> Any:
    """Decode the upstream body."""
    try:
        return json.loads(text)
    except (TypeError, ValueError) as exc:
        logger.error("parser.invalid_json", error=str(exc), exc_info=True)
        raise UpstreamParseError() from exc


def series_data(payload: Any) -> list[Any]:
    """Walk ``Results -> series[0] -> data`` and return the data array."""
    results = payload.get("Results") if isinstance(payload, Mapping) else None
    series = results.get("series") if isinstance(results, Mapping) else None
    if not isinstance(series, list) or not series:
        logger.warning("parser.invalid_shape", has_results=results is not None)
        raise UpstreamShapeError()

    first = series[0]
    data = first.get("data") if isinstance(first, Mapping) else None
    if not isinstance(data, list):
        logger.warning("parser.series_without_data")
        raise SeriesDataNotFound()
    return data


def find_entry(data: Sequence[Any], query: CPIQuery) -> Mapping[str, Any]:
    """Return the first raw data point matching the query's year and month."""
    year_text = str(query.year)
    month = query.month.lower()
    for raw in data:
        if not isinstance(raw, Mapping):
            continue
        period_name = raw.get("periodName")
        if str(raw.get("year")) != year_text or not isinstance(period_name, str):
            continue
        if period_name.lower() == month:
            return raw
    logger.warning("cpi.not_found", month=query.month, year=query.year)
    raise EntryNotFound(f"CPI data not found for {query.describe()}")


def parse_value(text: str) -> int:
    """Convert the text-encoded CPI value into an int, rounding half up.

    BLS publishes index levels with decimals (``"258.811"``); the API
    reports whole numbers.
    """
    try:
        number = Decimal(text.strip())
    except (AttributeError, InvalidOperation) as exc:
        raise ValueError(f"Cannot parse CPI value from {text!r}") from exc
    if not number.is_finite():
        raise ValueError(f"Cannot parse CPI value from {text!r}")
    return int(number.to_integral_value(rounding=ROUND_HALF_UP))


def parse_footnotes(raw_entry: Mapping[str, Any]) -> list[str]:
    """Collect the non-empty footnote texts of a data point, in order.

    Problems here never fail a lookup; they yield an empty list.
    """
    try:
        if "footnotes" not in raw_entry:
            logger.warning("parser.footnotes_missing")
            return []
        footnotes = raw_entry["footnotes"]
        if not isinstance(footnotes, list):
            logger.warning("parser.footnotes_not_array", footnotes_type=type(footnotes).__name__)
            return []
        texts = (note.get("text") if isinstance(note, Mapping) else None for note in footnotes)
        return [text for text in texts if isinstance(text, str) and text]
    except Exception:
        logger.error("parser.footnotes_failed", exc_info=True)
        return []


def load_entry(raw_entry: Mapping[str, Any], query: CPIQuery) -> CPIEntry:
    """Validate a raw data point into a :class:`CPIEntry`."""
    try:
        return _entry_schema.load(raw_entry)
    except ma.ValidationError as exc:
        logger.warning("cpi.entry_unusable", errors=exc.messages, period=query.describe())
        raise EntryNotFound(f"CPI value unavailable for {query.describe()}") from exc


def build_cpi_data(text: str, query: CPIQuery) -> CPIData:
    """Turn an upstream body into the CPI value for *query*.

    Raises :class:`~cpi_api.data.errors.CpiNotFound` subclasses when the
    payload is well formed but holds no usable value.
    """
    payload = load_payload(text)
    data = series_data(payload)
    raw_entry = find_entry(data, query)
    entry = load_entry(raw_entry, query)
    try:
        value = parse_value(entry.value)
    except ValueError as exc:
        logger.warning("cpi.value_unusable", value=entry.value, period=query.describe())
        raise EntryNotFound(f"CPI value unavailable for {query.describe()}") from exc
    return CPIData(value=value, notes=FootNotes(parse_footnotes(raw_entry)))


__all__ = [
    "build_cpi_data",
    "find_entry",
    "load_entry",
    "load_payload",
    "parse_footnotes",
    "parse_value",
    "series_data",
]
