from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any

# Coercion kinds understood by the field mapper.
STRING = "string"
DATE = "date"
INTEGER = "integer"
LIST = "list"


@dataclass(frozen=True)
class StringValue:
    """String field reported by the analysis backend."""

    type: str = "string"
    value: str = ""


@dataclass(frozen=True)
class DateValue:
    """Date field normalized by the analysis backend."""

    type: str = "date"
    value: date = date.min


@dataclass(frozen=True)
class IntegerValue:
    """Integer field normalized by the analysis backend."""

    type: str = "integer"
    value: int = 0


@dataclass(frozen=True)
class ListValue:
    """Array field; items are field values of any type."""

    type: str = "list"
    items: tuple["FieldValue", ...] = ()


@dataclass(frozen=True)
class OtherValue:
    """Any backend type the domain does not map (number, phone, address...)."""

    type: str = "other"
    content: str | None = None


FieldValue = StringValue | DateValue | IntegerValue | ListValue | OtherValue


@dataclass(frozen=True)
class AnalyzedDocument:
    """One document recognized by the analysis backend."""

    doc_type: str
    fields: dict[str, FieldValue] = field(default_factory=dict)
    confidence: float | None = None


def _f(kind: str) -> Any:
    return field(default=None, metadata={"kind": kind})


@dataclass(frozen=True)
class ExtractedFields:
    """Structured prior-authorization data read from a fax.

    Every attribute is optional: ``None`` means the backend did not find it.
    """

    # Patient
    patient_name: str | None = _f(STRING)
    date_of_birth: date | None = _f(DATE)
    member_id: str | None = _f(STRING)
    policy_number: str | None = _f(STRING)

    # Provider
    provider_name: str | None = _f(STRING)
    npi_number: str | None = _f(STRING)
    provider_contact: str | None = _f(STRING)
    facility_name: str | None = _f(STRING)
    facility_address: str | None = _f(STRING)
    referring_provider: str | None = _f(STRING)

    # Service
    service_type: str | None = _f(STRING)
    cpt_codes: list[str] | None = _f(LIST)
    icd10_codes: list[str] | None = _f(LIST)
    service_start_date: date | None = _f(DATE)
    service_end_date: date | None = _f(DATE)
    units_requested: str | None = _f(STRING)
    urgency_level: str | None = _f(STRING)

    # Clinical
    clinical_notes: str | None = _f(STRING)
    clinical_notes2: str | None = _f(STRING)

    # Administrative
    fax_received_date: date | None = _f(DATE)
    page_count: int | None = _f(INTEGER)

    # Fax header
    fax_date: date | None = _f(DATE)
    insurance_company: str | None = _f(STRING)
    insurance_fax_number: str | None = _f(STRING)
    sender_fax_number: str | None = _f(STRING)
    sender_name: str | None = _f(STRING)

    def to_payload(self) -> dict[str, object]:
        """JSON-ready dict keyed by camelCase names; absent fields are omitted."""
        payload: dict[str, object] = {}
        for spec in fields(self):
            value = getattr(self, spec.name)
            if value is None:
                continue
            if spec.metadata["kind"] == DATE:
                value = value.isoformat()
            elif spec.metadata["kind"] == LIST:
                value = list(value)
            payload[camel_name(spec.name)] = value
        return payload

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ExtractedFields":
        """Rebuild from a stored payload; unknown keys are ignored."""
        values: dict[str, Any] = {}
        for spec in fields(cls):
            raw = payload.get(camel_name(spec.name))
            if raw is None:
                continue
            if spec.metadata["kind"] == DATE:
                raw = date.fromisoformat(raw)
            elif spec.metadata["kind"] == LIST:
                raw = [str(item) for item in raw]
            values[spec.name] = raw
        return cls(**values)

    def populated_count(self) -> int:
        """Number of fields carrying a non-empty value."""
        return sum(1 for spec in fields(self) if getattr(self, spec.name) not in (None, "", []))


def field_kinds() -> dict[str, str]:
    """Map attribute name to coercion kind, in declaration order."""
    return {spec.name: spec.metadata["kind"] for spec in fields(ExtractedFields)}


def camel_name(attribute: str) -> str:
    """``icd10_codes`` -> ``icd10Codes`` (persisted key)."""
    head, *rest = attribute.split("_")
    return head + "".join(part.capitalize() for part in rest)


def backend_name(attribute: str) -> str:
    """``icd10_codes`` -> ``Icd10Codes`` (analysis model field label)."""
    return "".join(part.capitalize() for part in attribute.split("_"))
