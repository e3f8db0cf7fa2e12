import pymupdf

from paperblog.pdf.base import PAGE_SEPARATOR, BasePdfExtractor
from paperblog.pdf.exceptions import PdfExtractionError
from paperblog.pdf.models import PdfText, clean_info_value, parse_pdf_date


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text and metadata from PDF using PyMuPDF."""

    def extract(self, pdf_bytes: bytes) -> PdfText:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text().strip() for page in doc]
                info = doc.metadata or {}
            return PdfText(
                text=PAGE_SEPARATOR.join(pages).strip(),
                page_count=len(pages),
                title=clean_info_value(info.get("title")),
                author=clean_info_value(info.get("author")),
                creation_date=parse_pdf_date(info.get("creationDate")),
            )
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
