"""Fax intake state machine.

One call to ``IntakeOrchestrator.handle`` per storage delivery:

    unsupported extension   -> Skipped
    raw path (no folder)    -> organize -> Organized   (the move re-delivers)
    organized path          -> exists? -> create record (processing)
                               -> extract -> completed | failed

Every failure is converted into an outcome value; ``handle`` never raises.
"""

import time
from collections.abc import Callable
from datetime import UTC, datetime

from faxintake.config.settings import Settings
from faxintake.database.exceptions import DuplicateRecordError
from faxintake.database.repositories.authorization_repository import AuthorizationRepository
from faxintake.extraction.extractor import FieldExtractor
from faxintake.extraction.factory import ExtractorFactory
from faxintake.intake.models import (
    SKIP_ALREADY_PROCESSED,
    SKIP_UNSUPPORTED_FORMAT,
    STAGE_EXTRACTION,
    STAGE_ORGANIZE,
    STAGE_RECORD_CREATE,
    STAGE_RECORD_UPDATE,
    Completed,
    Failed,
    IntakeOutcome,
    Organized,
    Skipped,
)
from faxintake.intake.organizer import FileOrganizer
from faxintake.intake.paths import file_name_of, is_organized, is_supported_format
from faxintake.logging.logger import Log
from faxintake.storage.base import BaseBlobStorage

STAGE_UNEXPECTED = "unexpected"


def utcnow() -> datetime:
    return datetime.now(UTC)


def describe_error(exc: BaseException) -> str:
    """Non-empty message for an exception, falling back to its type name."""
    return str(exc) or type(exc).__name__


class IntakeOrchestrator:
    """Drives one delivered fax to a terminal record state or a skip."""

    def __init__(
        self,
        *,
        organizer: FileOrganizer,
        repository: AuthorizationRepository,
        extractor: FieldExtractor,
        model_id: str,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._organizer = organizer
        self._repository = repository
        self._extractor = extractor
        self._model_id = model_id
        self._clock = clock

    def handle(self, path: str, content: bytes, received_at: datetime) -> IntakeOutcome:
        """Run the state machine for one delivery of ``path``."""
        Log.info(f"Intake triggered for blob {path} (received {received_at.isoformat()})")
        try:
            return self._dispatch(path, content)
        except Exception as exc:
            Log.error(f"Unexpected intake error for blob {path}: {exc}", exc)
            return Failed(path=path, stage=STAGE_UNEXPECTED, error=describe_error(exc))

    def _dispatch(self, path: str, content: bytes) -> IntakeOutcome:
        if not is_supported_format(path):
            Log.info(f"Skipping blob {path}: unsupported file format")
            return Skipped(path=path, reason=SKIP_UNSUPPORTED_FORMAT)
        if not is_organized(path):
            return self._organize(path)
        return self._process(path, content)

    def _organize(self, path: str) -> IntakeOutcome:
        try:
            destination = self._organizer.organize(path)
        except Exception as exc:
            Log.error(f"Failed to organize blob {path}: {exc}", exc)
            return Failed(path=path, stage=STAGE_ORGANIZE, error=describe_error(exc))
        Log.info(f"Blob {path} moved to {destination}; processing continues on the new blob")
        return Organized(path=path, destination=destination)

    def _process(self, path: str, content: bytes) -> IntakeOutcome:
        started = time.monotonic()
        file_name = file_name_of(path)

        try:
            if self._repository.exists_by_blob_name(path):
                Log.info(f"Skipping blob {path}: already processed")
                return Skipped(path=path, reason=SKIP_ALREADY_PROCESSED)
            Log.info(f"Processing file {file_name}, size: {len(content)} bytes")
            record_id = self._repository.create(path, file_name, self._clock())
        except DuplicateRecordError:
            Log.info(f"Skipping blob {path}: record created by a concurrent delivery")
            return Skipped(path=path, reason=SKIP_ALREADY_PROCESSED)
        except Exception as exc:
            Log.error(f"Failed to create record for blob {path}: {exc}", exc)
            return Failed(path=path, stage=STAGE_RECORD_CREATE, error=describe_error(exc))

        try:
            Log.info(f"Analyzing document with model {self._model_id}")
            fields = self._extractor.extract(content, self._model_id)
        except Exception as exc:
            return self._fail(path, STAGE_EXTRACTION, record_id, exc)

        Log.info(
            f"Document analysis completed. Patient: {fields.patient_name or 'N/A'}, "
            f"MemberId: {fields.member_id or 'N/A'}"
        )

        try:
            self._repository.mark_completed(record_id, fields)
        except Exception as exc:
            return self._fail(path, STAGE_RECORD_UPDATE, record_id, exc)

        elapsed_ms = (time.monotonic() - started) * 1000
        Log.info(f"Intake completed for blob {path} in {elapsed_ms:.0f}ms")
        return Completed(path=path, record_id=record_id, fields=fields)

    def _fail(self, path: str, stage: str, record_id: str, exc: Exception) -> Failed:
        message = describe_error(exc)
        Log.error(f"Intake failed for blob {path} at {stage}: {message}", exc)
        try:
            self._repository.mark_failed(record_id, message)
        except Exception as mark_exc:
            Log.error(f"Failed to mark record {record_id} as failed: {mark_exc}", mark_exc)
            return Failed(
                path=path, stage=stage, error=message, record_id=record_id, marked_failed=False
            )
        Log.info(f"Marked record {record_id} as failed")
        return Failed(path=path, stage=stage, error=message, record_id=record_id, marked_failed=True)


def build_orchestrator(settings: Settings, storage: BaseBlobStorage) -> IntakeOrchestrator:
    """Build an IntakeOrchestrator with the configured adapters.

    Raises:
        ValueError: if a required setting for the selected providers is missing.
    """
    model_id = settings.document_intelligence_model_id.strip()
    if settings.analysis_provider.lower() == "example":
        model_id = model_id or "example"
    elif not model_id:
        raise ValueError("document_intelligence_model_id is required")

    organizer = FileOrganizer(
        storage,
        poll_interval_seconds=settings.organize_poll_interval_seconds,
        timeout_seconds=settings.organize_timeout_seconds,
    )
    return IntakeOrchestrator(
        organizer=organizer,
        repository=AuthorizationRepository(),
        extractor=ExtractorFactory.create(settings),
        model_id=model_id,
    )
