class ExtractionError(Exception):
    """Base exception for field extraction errors."""


class MissingModelIdError(ExtractionError):
    """Raised when no analysis model identifier is configured."""
