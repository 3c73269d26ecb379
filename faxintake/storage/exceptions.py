class StorageError(Exception):
    """Base exception for blob storage errors."""


class BlobNotFoundError(StorageError):
    """Raised when a blob does not exist in the container."""


class CopyFailedError(StorageError):
    """Raised when a server-side copy ends in a non-success state."""

    def __init__(self, status: str, destination: str) -> None:
        super().__init__(f"Copy to {destination} ended with status '{status}'")
        self.status = status
        self.destination = destination


class CopyTimeoutError(StorageError):
    """Raised when a copy stays pending longer than the configured bound."""
