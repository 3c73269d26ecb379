from abc import ABC, abstractmethod

from faxintake.storage.models import BlobItem


class BaseBlobStorage(ABC):
    """Contract for the container holding incoming faxes.

    Blob names are container-relative and use ``/`` as folder separator.
    """

    @abstractmethod
    def list_blobs(self) -> list[BlobItem]:
        """List every blob in the container, nested ones included."""

    @abstractmethod
    def read(self, name: str) -> bytes:
        """Download a blob.

        Raises:
            BlobNotFoundError: if the blob does not exist.
        """

    @abstractmethod
    def start_copy(self, source: str, destination: str) -> None:
        """Start a copy of ``source`` to ``destination``, overwriting it."""

    @abstractmethod
    def get_copy_status(self, destination: str) -> str:
        """Copy status of ``destination``: pending, success, failed or aborted."""

    @abstractmethod
    def delete(self, name: str) -> None:
        """Delete a blob.

        Raises:
            BlobNotFoundError: if the blob does not exist.
        """
