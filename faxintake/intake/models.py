from dataclasses import dataclass

from faxintake.extraction.models import ExtractedFields

SKIP_UNSUPPORTED_FORMAT = "unsupported_format"
SKIP_ALREADY_PROCESSED = "already_processed"

STAGE_ORGANIZE = "organize"
STAGE_RECORD_CREATE = "record_create"
STAGE_EXTRACTION = "extraction"
STAGE_RECORD_UPDATE = "record_update"


@dataclass(frozen=True)
class Skipped:
    """Nothing to do for this delivery; no state changed."""

    path: str
    reason: str


@dataclass(frozen=True)
class Organized:
    """Raw upload relocated; processing happens on the retrigger."""

    path: str
    destination: str


@dataclass(frozen=True)
class Completed:
    path: str
    record_id: str
    fields: ExtractedFields


@dataclass(frozen=True)
class Failed:
    """Invocation failed at ``stage``.

    ``record_id`` is None for failures before a record exists. With a
    ``record_id`` and ``marked_failed=False`` the record could not be moved to
    'failed' and is left in 'processing' for reconciliation.
    """

    path: str
    stage: str
    error: str
    record_id: str | None = None
    marked_failed: bool = False


IntakeOutcome = Skipped | Organized | Completed | Failed
