from datetime import datetime, timedelta, timezone

import pytest

from paperblog.pdf.base import PAGE_SEPARATOR
from paperblog.pdf.exceptions import PdfExtractionError
from paperblog.pdf.models import clean_info_value, parse_pdf_date
from paperblog.pdf.pdfplumber_adapter import PdfPlumberAdapter
from paperblog.pdf.pymupdf_adapter import PyMuPdfAdapter

ADAPTERS = [PdfPlumberAdapter, PyMuPdfAdapter]


@pytest.mark.parametrize("adapter_cls", ADAPTERS)
class TestTextAdapters:
    def test_extracts_text(self, adapter_cls: type, sample_pdf_bytes: bytes) -> None:
        result = adapter_cls().extract(sample_pdf_bytes)
        assert "Hello PDF World" in result.text
        assert result.page_count == 1

    def test_pages_are_separated_by_form_feed(
        self, adapter_cls: type, multi_page_pdf_bytes: bytes
    ) -> None:
        result = adapter_cls().extract(multi_page_pdf_bytes)
        assert result.page_count == 2
        first, second = result.text.split(PAGE_SEPARATOR)
        assert "Page one content" in first
        assert "Page two content" in second

    def test_reads_document_info(self, adapter_cls: type, journal_pdf_bytes: bytes) -> None:
        result = adapter_cls().extract(journal_pdf_bytes)
        assert result.title == "Reading Habits of First Year Students"
        assert result.author == "Jane Doe, John Smith"
        assert isinstance(result.creation_date, datetime)

    def test_invalid_bytes_raise_extraction_error(self, adapter_cls: type) -> None:
        with pytest.raises(PdfExtractionError, match="extraction failed"):
            adapter_cls().extract(b"definitely not a pdf")


class TestParsePdfDate:
    def test_parses_full_date_with_offset(self) -> None:
        parsed = parse_pdf_date("D:20240131120000+07'00'")
        assert parsed == datetime(2024, 1, 31, 12, 0, 0, tzinfo=timezone(timedelta(hours=7)))

    def test_parses_utc(self) -> None:
        parsed = parse_pdf_date("D:20231105083015Z")
        assert parsed == datetime(2023, 11, 5, 8, 30, 15, tzinfo=timezone.utc)

    def test_parses_negative_offset(self) -> None:
        parsed = parse_pdf_date("D:20230101000000-05'30'")
        assert parsed is not None
        assert parsed.utcoffset() == -timedelta(hours=5, minutes=30)

    def test_year_only(self) -> None:
        assert parse_pdf_date("D:2022") == datetime(2022, 1, 1)

    @pytest.mark.parametrize("value", [None, "", "yesterday", "D:20241399", 42])
    def test_invalid_values_become_none(self, value: object) -> None:
        assert parse_pdf_date(value) is None


class TestCleanInfoValue:
    def test_strips_whitespace(self) -> None:
        assert clean_info_value("  Title  ") == "Title"

    def test_blank_and_non_string_become_none(self) -> None:
        assert clean_info_value("   ") is None
        assert clean_info_value(None) is None
        assert clean_info_value(3) is None
