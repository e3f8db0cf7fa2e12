import io

import pymupdf
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

JOURNAL_LINES = [
    "Reading Habits of First Year Students",
    "Jane Doe and John Smith",
    "Abstract",
    "This study examines the reading habits of first year students at a large public",
    "university and reports how they changed over one academic year of teaching.",
    "Introduction",
    "Reading is a core skill for academic success, and prior work [1] has shown that",
    "students who read widely tend to perform better in their courses (2024).",
    "Methodology",
    "We surveyed participants at the start and at the end of the year with the same",
    "questionnaire, and we compared the answers from both rounds for each student.",
    "Results",
    "The results show a steady increase in weekly reading time across the sample, with",
    "the largest gains among students who joined a reading group during the year.",
    "References",
    "[1] Smith, J. et al. Reading and learning outcomes. Journal of Education (2024).",
]


@pytest.fixture()
def journal_text() -> str:
    """Plain text that passes every journal check and reads as English."""
    return "\n".join(JOURNAL_LINES)


def _render_lines(c: canvas.Canvas, lines: list[str]) -> None:
    y = 740
    for line in lines:
        c.drawString(54, y, line)
        y -= 16


def _make_pixmap(colorspace: pymupdf.Colorspace, width: int, height: int, value: int) -> pymupdf.Pixmap:
    pixmap = pymupdf.Pixmap(colorspace, pymupdf.IRect(0, 0, width, height), False)
    pixmap.clear_with(value)
    return pixmap


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def journal_pdf_bytes() -> bytes:
    """A text-only PDF that passes the journal checks, with document-info metadata."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.setTitle("Reading Habits of First Year Students")
    c.setAuthor("Jane Doe, John Smith")
    _render_lines(c, JOURNAL_LINES)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def image_pdf_bytes() -> bytes:
    """Two pages: a 100x100 grayscale image on page 1, a 1000x800 RGB image on page 2."""
    doc = pymupdf.open()
    first = doc.new_page()
    for offset, line in enumerate(JOURNAL_LINES[:8]):
        first.insert_text((54, 60 + offset * 14), line, fontsize=10)
    first.insert_image(pymupdf.Rect(54, 200, 154, 300), pixmap=_make_pixmap(pymupdf.csGRAY, 100, 100, 90))
    second = doc.new_page()
    for offset, line in enumerate(JOURNAL_LINES[8:]):
        second.insert_text((54, 60 + offset * 14), line, fontsize=10)
    second.insert_image(
        pymupdf.Rect(54, 200, 554, 600), pixmap=_make_pixmap(pymupdf.csRGB, 1000, 800, 200)
    )
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture()
def single_image_pdf_bytes() -> bytes:
    doc = pymupdf.open()
    page = doc.new_page()
    page.insert_image(pymupdf.Rect(50, 50, 150, 150), pixmap=_make_pixmap(pymupdf.csRGB, 40, 30, 10))
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture()
def three_page_pdf_bytes() -> bytes:
    """Three pages with one distinct 20x10 RGB image each."""
    doc = pymupdf.open()
    for value in (40, 120, 200):
        page = doc.new_page()
        page.insert_image(pymupdf.Rect(50, 50, 150, 100), pixmap=_make_pixmap(pymupdf.csRGB, 20, 10, value))
    data = doc.tobytes()
    doc.close()
    return data
