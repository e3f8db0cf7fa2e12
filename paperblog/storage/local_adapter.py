import uuid
from pathlib import Path

from paperblog.logging.logger import Log
from paperblog.storage.base import BaseImageStorage, extension_for
from paperblog.storage.exceptions import StorageError


class LocalImageStorage(BaseImageStorage):
    """Writes images into a local directory, for development runs and tests.

    URLs are ``<base_url>/<file>`` when a base URL is configured and
    ``file://`` URIs otherwise.
    """

    def __init__(self, *, directory: str | Path, base_url: str = "", max_workers: int = 4) -> None:
        super().__init__(max_workers=max_workers)
        self._directory = Path(directory)
        self._base_url = base_url.rstrip("/")

    def upload(self, data: bytes, mime_type: str, alt_text: str) -> str:
        path = self._directory / f"{uuid.uuid4()}.{extension_for(mime_type)}"
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc
        Log.debug(f"Stored image '{alt_text}' at {path}")
        if self._base_url:
            return f"{self._base_url}/{path.name}"
        return path.resolve().as_uri()
