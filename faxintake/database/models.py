from dataclasses import dataclass
from datetime import datetime

from faxintake.extraction.models import ExtractedFields

STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"

TERMINAL_STATUSES = frozenset({STATUS_COMPLETED, STATUS_FAILED})


@dataclass
class AuthorizationRecord:
    """Represents a row from the authorization_records table."""

    id: str
    blob_name: str
    file_name: str
    uploaded_at: datetime
    status: str
    extracted_data: ExtractedFields | None = None
    processed_at: datetime | None = None
    error_message: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def source_path(self) -> str:
        return self.blob_name

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def to_document(self) -> dict[str, object]:
        """Conceptual JSON shape of the record, as reviewers consume it."""
        document: dict[str, object] = {
            "id": self.id,
            "blobName": self.blob_name,
            "fileName": self.file_name,
            "uploadedAt": self.uploaded_at.isoformat(),
            "status": self.status,
        }
        if self.extracted_data is not None:
            document["extractedData"] = self.extracted_data.to_payload()
        if self.processed_at is not None:
            document["processedAt"] = self.processed_at.isoformat()
        if self.error_message is not None:
            document["errorMessage"] = self.error_message
        return document
