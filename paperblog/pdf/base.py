from abc import ABC, abstractmethod

from paperblog.pdf.models import PdfText

PAGE_SEPARATOR = "\n\f"


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> PdfText:
        """Extract text and document-info metadata from PDF bytes.

        Pages are joined with ``PAGE_SEPARATOR`` so page boundaries survive
        as form feeds in the linearized text.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            PdfText with the stripped text, page count and metadata.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """
