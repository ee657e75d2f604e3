"""Domain models for CPI lookups against the BLS timeseries API."""

from collections.abc import Iterable
from typing import Any

import marshmallow as ma
from attrs import define, field


def _strip(value: str) -> str:
    """Trim surrounding whitespace from a field."""
    return value.strip()


def _notes_tuple(value: Iterable[str]) -> tuple[str, ...]:
    """Freeze footnote texts so cached results cannot be mutated by callers."""
    return tuple(value)


@define(slots=True, frozen=True)
class CPIQuery:
    """Validated (year, month) pair for a single lookup."""

    year: int
    month: str

    def describe(self) -> str:
        """Human-readable period label, e.g. ``March 2020``."""
        return f"{self.month} {self.year}"


@define(slots=True, frozen=True)
class CPIEntry:
    """Single monthly data point as published in a BLS series."""

    year: str = field(converter=_strip)
    period_name: str = field(converter=_strip)
    value: str = field(converter=_strip)


class CPIEntrySchema(ma.Schema):
    """Marshmallow schema for the subset of a BLS data point we rely on."""

    class Meta:
        unknown = ma.EXCLUDE

    year = ma.fields.Str(required=True)
    period_name = ma.fields.Str(required=True, data_key="periodName")
    value = ma.fields.Str(required=True)

    @ma.post_load
    def make_entry(self, data: dict[str, str], **kwargs: object) -> CPIEntry:
        """Convert validated upstream payloads into :class:`CPIEntry` objects."""
        return CPIEntry(**data)


@define(slots=True, frozen=True)
class FootNotes:
    """Ordered footnote texts attached to a CPI value."""

    footnotes: tuple[str, ...] = field(converter=_notes_tuple, factory=tuple)

    def __len__(self) -> int:
        return len(self.footnotes)


@define(slots=True, frozen=True)
class CPIData:
    """CPI value for one month plus explanatory notes.

    ``value`` is ``None`` only when no usable entry was found.
    """

    value: int | None = None
    notes: FootNotes = field(factory=FootNotes)

    @classmethod
    def not_found(cls, reason: str) -> "CPIData":
        """Build the result returned when a lookup yields no value."""
        return cls(value=None, notes=FootNotes([reason]))

    @property
    def found(self) -> bool:
        return self.value is not None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body served by the API."""
        return CPIDataSchema().dump(self)


class FootNotesSchema(ma.Schema):
    """Marshmallow schema for :class:`FootNotes`."""

    footnotes = ma.fields.List(ma.fields.Str(), required=True)

    @ma.post_load
    def make_footnotes(self, data: dict[str, list[str]], **kwargs: object) -> FootNotes:
        """Instantiate :class:`FootNotes` from validated data."""
        return FootNotes(data["footnotes"])


class CPIDataSchema(ma.Schema):
    """Marshmallow schema for serializing :class:`CPIData` responses."""

    value = ma.fields.Int(required=True, allow_none=True)
    notes = ma.fields.Nested(FootNotesSchema, required=True)

    @ma.post_load
    def make_cpi_data(self, data: dict[str, Any], **kwargs: object) -> CPIData:
        """Instantiate :class:`CPIData` from validated payloads."""
        return CPIData(value=data["value"], notes=data["notes"])
