import os
import shutil
from datetime import UTC, datetime
from pathlib import Path

from faxintake.storage.base import BaseBlobStorage
from faxintake.storage.exceptions import BlobNotFoundError, StorageError
from faxintake.storage.models import COPY_SUCCESS, BlobItem

_TEMP_SUFFIX = ".part"


class LocalBlobStorage(BaseBlobStorage):
    """Directory tree standing in for a blob container.

    Copies complete synchronously and land atomically (temp file + rename), so
    a watcher never lists a half-written destination.
    """

    def __init__(self, root: Path) -> None:
        self._root = root.resolve()
        self._root.mkdir(parents=True, exist_ok=True)

    def list_blobs(self) -> list[BlobItem]:
        items: list[BlobItem] = []
        for path in sorted(self._root.rglob("*")):
            if not path.is_file() or path.name.endswith(_TEMP_SUFFIX):
                continue
            stat = path.stat()
            items.append(
                BlobItem(
                    name=path.relative_to(self._root).as_posix(),
                    etag=f"{stat.st_mtime_ns:x}-{stat.st_size:x}",
                    last_modified=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
                    size=stat.st_size,
                )
            )
        return items

    def read(self, name: str) -> bytes:
        path = self._existing(name)
        return path.read_bytes()

    def start_copy(self, source: str, destination: str) -> None:
        src = self._existing(source)
        dst = self._resolve(destination)
        dst.parent.mkdir(parents=True, exist_ok=True)
        tmp = dst.with_name(f".{dst.name}{_TEMP_SUFFIX}")
        try:
            shutil.copyfile(src, tmp)
            os.replace(tmp, dst)
        finally:
            tmp.unlink(missing_ok=True)

    def get_copy_status(self, destination: str) -> str:
        self._existing(destination)
        return COPY_SUCCESS

    def delete(self, name: str) -> None:
        self._existing(name).unlink()

    def _existing(self, name: str) -> Path:
        path = self._resolve(name)
        if not path.is_file():
            raise BlobNotFoundError(f"Blob not found: {name}")
        return path

    def _resolve(self, name: str) -> Path:
        path = (self._root / name).resolve()
        if not path.is_relative_to(self._root):
            raise StorageError(f"Blob name escapes storage root: {name}")
        return path
