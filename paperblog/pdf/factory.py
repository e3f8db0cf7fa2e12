from typing import ClassVar

from paperblog.config.settings import Settings
from paperblog.pdf.base import BasePdfExtractor
from paperblog.pdf.image_extractor import ImageExtractor
from paperblog.pdf.pdfplumber_adapter import PdfPlumberAdapter
from paperblog.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the configured text extractor and the image extractor."""

    ADAPTERS: ClassVar[dict[str, type[BasePdfExtractor]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create_image_extractor(cls, settings: Settings) -> ImageExtractor:
        return ImageExtractor(
            resolve_timeout_seconds=settings.image_resolve_timeout_seconds,
        )
