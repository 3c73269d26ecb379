class RecordStoreError(Exception):
    """Base exception for authorization record persistence errors."""


class RecordNotFoundError(RecordStoreError):
    """Raised when no record in 'processing' state matches an id."""


class DuplicateRecordError(RecordStoreError):
    """Raised when a record already exists for a blob name."""
