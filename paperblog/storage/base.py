import base64
import binascii
import mimetypes
from abc import ABC, abstractmethod
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from paperblog.extraction.models import ExtractedImage
from paperblog.logging.logger import Log
from paperblog.storage.exceptions import StorageError


class BaseImageStorage(ABC):
    """Contract for object storage that hands back a public URL per upload."""

    def __init__(self, max_workers: int = 4) -> None:
        self._max_workers = max(1, max_workers)

    @abstractmethod
    def upload(self, data: bytes, mime_type: str, alt_text: str) -> str:
        """Store one object and return its public URL.

        Raises:
            StorageError: if the object could not be stored.
        """

    def upload_many(self, images: Sequence[ExtractedImage]) -> list[str]:
        """Upload images concurrently; URLs come back in input order.

        Raises:
            StorageError: if any upload fails.
        """
        if not images:
            return []
        with ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(images)), thread_name_prefix="upload"
        ) as executor:
            urls = list(executor.map(self._upload_image, images))
        Log.info(f"Uploaded {len(urls)} images")
        return urls

    def _upload_image(self, image: ExtractedImage) -> str:
        try:
            data = base64.b64decode(image.data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise StorageError(
                f"Image {image.position_index} has an invalid base64 payload: {exc}"
            ) from exc
        return self.upload(data, image.mime_type, image.alt_text)


def extension_for(mime_type: str) -> str:
    """File extension (without dot) for a MIME type, ``bin`` when unknown."""
    extension = mimetypes.guess_extension(mime_type.split(";")[0].strip())
    return extension.lstrip(".") if extension else "bin"
