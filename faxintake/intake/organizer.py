import time

from faxintake.intake.paths import organized_destination
from faxintake.logging.logger import Log
from faxintake.storage.base import BaseBlobStorage
from faxintake.storage.exceptions import CopyFailedError, CopyTimeoutError
from faxintake.storage.models import COPY_PENDING, COPY_SUCCESS


class FileOrganizer:
    """Moves a raw upload into its own folder: copy, wait, then delete.

    The source is deleted only after the destination copy is confirmed, so a
    failed copy never loses the file. No retries.
    """

    def __init__(
        self,
        storage: BaseBlobStorage,
        poll_interval_seconds: float = 0.1,
        timeout_seconds: float = 300.0,
    ) -> None:
        self._storage = storage
        self._poll_interval_seconds = poll_interval_seconds
        self._timeout_seconds = timeout_seconds

    def organize(self, path: str) -> str:
        """Relocate ``path`` and return the destination blob name.

        Raises:
            CopyFailedError: if the copy ends in a non-success state.
            CopyTimeoutError: if the copy is still pending after the timeout.
            StorageError: on any storage failure.
        """
        destination = organized_destination(path)
        Log.info(f"Organizing blob {path} -> {destination}")

        self._storage.start_copy(path, destination)
        self._wait_for_copy(destination)
        self._storage.delete(path)

        Log.info(f"Moved {path} to {destination}")
        return destination

    def _wait_for_copy(self, destination: str) -> None:
        deadline = time.monotonic() + self._timeout_seconds
        status = self._storage.get_copy_status(destination)
        while status == COPY_PENDING:
            if time.monotonic() >= deadline:
                raise CopyTimeoutError(
                    f"Copy to {destination} still pending after {self._timeout_seconds}s"
                )
            time.sleep(self._poll_interval_seconds)
            status = self._storage.get_copy_status(destination)
        if status != COPY_SUCCESS:
            raise CopyFailedError(status, destination)
