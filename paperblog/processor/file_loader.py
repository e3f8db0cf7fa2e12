from pathlib import Path

from paperblog.processor.exceptions import FileReadError, PdfTooLargeError


class FileLoader:
    """Reads PDF bytes from disk, enforcing a size limit."""

    DEFAULT_MAX_BYTES = 50 * 1024 * 1024

    def __init__(self, max_bytes: int = DEFAULT_MAX_BYTES) -> None:
        self._max_bytes = max_bytes

    def load(self, path: str | Path) -> bytes:
        """Read a PDF file.

        Raises:
            FileReadError: if the path is missing, not a file, or unreadable.
            PdfTooLargeError: if the file is larger than the limit.
        """
        path = Path(path)
        if not path.is_file():
            raise FileReadError(f"File not found: {path}")
        try:
            size = path.stat().st_size
            if size > self._max_bytes:
                raise PdfTooLargeError(
                    f"{path} is {size} bytes, larger than the {self._max_bytes} byte limit"
                )
            return path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Failed to read {path}: {exc}") from exc
