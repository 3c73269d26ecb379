from dataclasses import dataclass
from datetime import datetime

COPY_PENDING = "pending"
COPY_SUCCESS = "success"
COPY_FAILED = "failed"
COPY_ABORTED = "aborted"


@dataclass(frozen=True)
class BlobItem:
    """One object listed from the watched container."""

    name: str
    etag: str
    last_modified: datetime
    size: int = 0
