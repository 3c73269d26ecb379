from pathlib import Path

from faxintake.config.settings import Settings
from faxintake.storage.azure_blob_adapter import AzureBlobStorage
from faxintake.storage.base import BaseBlobStorage
from faxintake.storage.local_adapter import LocalBlobStorage


class BlobStorageFactory:
    """Creates the blob storage adapter selected by settings."""

    BACKENDS = ("local", "azure")

    @classmethod
    def create(cls, settings: Settings) -> BaseBlobStorage:
        backend = settings.storage_backend.lower()
        if backend == "local":
            return LocalBlobStorage(Path(settings.storage_local_root))
        if backend == "azure":
            if not settings.storage_connection_string:
                raise ValueError("storage_connection_string is required for storage_backend=azure")
            return AzureBlobStorage(
                connection_string=settings.storage_connection_string,
                container=settings.storage_container,
            )
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
