import logging
import sys
from typing import ClassVar, TextIO


class Log:
    """Process-wide logging facade for the paperblog pipeline.

    Messages go to the ``paperblog`` logger. Keyword arguments are attached
    to the record as ``extra`` fields so structured handlers can pick them up
    (``Log.warning("...", page=3)``).
    """

    FORMAT: ClassVar[str] = "%(asctime)s [%(levelname)s] %(message)s"

    _logger: logging.Logger = logging.getLogger("paperblog")

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and attach a single stream handler (stdout by default)."""
        cls._logger.setLevel(log_level.upper())
        cls._logger.propagate = False
        if not cls._logger.handlers:
            handler = logging.StreamHandler(stream or sys.stdout)
            handler.setFormatter(logging.Formatter(cls.FORMAT))
            cls._logger.addHandler(handler)

    @classmethod
    def is_debug(cls) -> bool:
        return cls._logger.isEnabledFor(logging.DEBUG)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, exc: BaseException | None = None, **kwargs: object) -> None:
        """Log an error; pass ``exc`` to include its traceback."""
        cls._logger.error(message, exc_info=exc, extra=kwargs)
