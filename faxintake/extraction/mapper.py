"""Maps an analyzed document's typed field bag onto ExtractedFields.

One coercion rule per field kind, applied uniformly:

* string  -- only string-typed values.
* date    -- native date, else a string parsed by dateutil.
* integer -- native integer, else a string parsed with int().
* list    -- native list (string items only, order kept), else a
             comma-separated string, items stripped and empties dropped.

Anything else maps to None. Nothing here raises for bad backend data.
"""

from collections.abc import Callable
from datetime import date

from dateutil import parser as date_parser

from faxintake.extraction.models import (
    DATE,
    INTEGER,
    LIST,
    STRING,
    AnalyzedDocument,
    DateValue,
    ExtractedFields,
    FieldValue,
    IntegerValue,
    ListValue,
    StringValue,
    backend_name,
    field_kinds,
)
from faxintake.logging.logger import Log


def as_string(value: FieldValue | None) -> str | None:
    if isinstance(value, StringValue):
        return value.value
    return None


def as_date(value: FieldValue | None) -> date | None:
    if isinstance(value, DateValue):
        return value.value
    if isinstance(value, StringValue):
        try:
            return date_parser.parse(value.value).date()
        except (ValueError, OverflowError):
            return None
    return None


def as_integer(value: FieldValue | None) -> int | None:
    if isinstance(value, IntegerValue):
        return value.value
    if isinstance(value, StringValue):
        try:
            return int(value.value)
        except ValueError:
            return None
    return None


def as_string_list(value: FieldValue | None) -> list[str] | None:
    if isinstance(value, ListValue):
        return [item.value for item in value.items if isinstance(item, StringValue)]
    if isinstance(value, StringValue):
        return [part.strip() for part in value.value.split(",") if part.strip()]
    return None


_COERCERS: dict[str, Callable[[FieldValue | None], object]] = {
    STRING: as_string,
    DATE: as_date,
    INTEGER: as_integer,
    LIST: as_string_list,
}


def map_fields(document: AnalyzedDocument) -> ExtractedFields:
    """Build ExtractedFields from one analyzed document."""
    values: dict[str, object] = {}
    for attribute, kind in field_kinds().items():
        label = backend_name(attribute)
        coerced = _COERCERS[kind](document.fields.get(label))
        if coerced is None:
            Log.debug(f"Field not found or not {kind}: {label}")
            continue
        values[attribute] = coerced
    return ExtractedFields(**values)  # type: ignore[arg-type]
