from azure.core.exceptions import ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContainerClient

from faxintake.logging.logger import Log
from faxintake.storage.base import BaseBlobStorage
from faxintake.storage.exceptions import BlobNotFoundError
from faxintake.storage.models import BlobItem


class AzureBlobStorage(BaseBlobStorage):
    """Blob container in an Azure Storage account."""

    def __init__(
        self,
        *,
        connection_string: str,
        container: str,
        container_client: ContainerClient | None = None,
    ) -> None:
        self._container = container_client or BlobServiceClient.from_connection_string(
            connection_string
        ).get_container_client(container)
        Log.info(f"Blob storage initialized for container {container}")

    def list_blobs(self) -> list[BlobItem]:
        return [
            BlobItem(
                name=blob.name,
                etag=blob.etag,
                last_modified=blob.last_modified,
                size=blob.size or 0,
            )
            for blob in self._container.list_blobs()
        ]

    def read(self, name: str) -> bytes:
        try:
            return self._container.download_blob(name).readall()
        except ResourceNotFoundError as exc:
            raise BlobNotFoundError(f"Blob not found: {name}") from exc

    def start_copy(self, source: str, destination: str) -> None:
        source_url = self._container.get_blob_client(source).url
        self._container.get_blob_client(destination).start_copy_from_url(source_url)

    def get_copy_status(self, destination: str) -> str:
        try:
            properties = self._container.get_blob_client(destination).get_blob_properties()
        except ResourceNotFoundError as exc:
            raise BlobNotFoundError(f"Blob not found: {destination}") from exc
        return str(properties.copy.status or "unknown")

    def delete(self, name: str) -> None:
        try:
            self._container.delete_blob(name)
        except ResourceNotFoundError as exc:
            raise BlobNotFoundError(f"Blob not found: {name}") from exc
