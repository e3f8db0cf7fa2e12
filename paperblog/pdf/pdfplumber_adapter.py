import io

import pdfplumber

from paperblog.pdf.base import PAGE_SEPARATOR, BasePdfExtractor
from paperblog.pdf.exceptions import PdfExtractionError
from paperblog.pdf.models import PdfText, clean_info_value, parse_pdf_date


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text and metadata from PDF using pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> PdfText:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [(page.extract_text() or "").strip() for page in pdf.pages]
                info = pdf.metadata or {}
            return PdfText(
                text=PAGE_SEPARATOR.join(pages).strip(),
                page_count=len(pages),
                title=clean_info_value(info.get("Title")),
                author=clean_info_value(info.get("Author")),
                creation_date=parse_pdf_date(info.get("CreationDate")),
            )
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
