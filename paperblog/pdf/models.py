import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

_PDF_DATE_RE = re.compile(
    r"^(?:D:)?(?P<year>\d{4})(?P<month>\d{2})?(?P<day>\d{2})?"
    r"(?P<hour>\d{2})?(?P<minute>\d{2})?(?P<second>\d{2})?"
    r"(?P<tz>Z|[+-]\d{2}'?\d{2}'?)?"
)


@dataclass(frozen=True)
class PdfText:
    """Linearized text and document-info metadata of a PDF."""

    text: str
    page_count: int
    title: str | None = None
    author: str | None = None
    creation_date: datetime | None = None


def clean_info_value(value: object) -> str | None:
    """Normalize a document-info entry: non-strings and blanks become None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def parse_pdf_date(value: object) -> datetime | None:
    """Parse a PDF date string (``D:YYYYMMDDHHmmSSOHH'mm'``).

    Returns None for missing or malformed values.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None
    match = _PDF_DATE_RE.match(value.strip())
    if match is None:
        return None
    parts = match.groupdict()
    try:
        parsed = datetime(
            int(parts["year"]),
            int(parts["month"] or 1),
            int(parts["day"] or 1),
            int(parts["hour"] or 0),
            int(parts["minute"] or 0),
            int(parts["second"] or 0),
        )
    except ValueError:
        return None

    tz = parts["tz"]
    if not tz:
        return parsed
    if tz == "Z":
        return parsed.replace(tzinfo=timezone.utc)
    digits = tz[1:].replace("'", "")
    offset = timedelta(hours=int(digits[:2]), minutes=int(digits[2:4] or 0))
    if tz[0] == "-":
        offset = -offset
    return parsed.replace(tzinfo=timezone(offset))
