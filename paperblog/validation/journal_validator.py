"""Heuristic check that extracted text reads like an academic paper.

Four checks run against the text, in this order:
1. trimmed length of at least ``MIN_TEXT_LENGTH`` characters;
2. at least ``MIN_KEYWORD_MATCHES`` academic keywords (substring match);
3. at least ``MIN_SECTION_MATCHES`` structural section headings;
4. at least one citation pattern.

The first failing check becomes the ``RejectionReason`` of the report.
"""

import re

from paperblog.logging.logger import Log
from paperblog.validation.exceptions import JournalValidationError
from paperblog.validation.models import RejectionReason, ValidationReport

MIN_TEXT_LENGTH = 500
MIN_KEYWORD_MATCHES = 3
MIN_SECTION_MATCHES = 2

ACADEMIC_KEYWORDS: tuple[str, ...] = (
    "abstract",
    "introduction",
    "methodology",
    "method",
    "results",
    "discussion",
    "conclusion",
    "references",
    "bibliography",
    "literature review",
    "hypothesis",
    "doi",
    "journal",
    "issn",
    "volume",
    "keywords",
    "findings",
    "analysis",
    "research",
    "study",
    "participants",
    "experiment",
    "data collection",
    "theoretical framework",
    "acknowledgment",
)

SECTION_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\babstract\b",
        r"\bintroduction\b",
        r"\b(method|methods|methodology|materials)\b",
        r"\bresults?\b",
        r"\b(conclusions?|discussion)\b",
        r"\breferences?\b",
    )
)

CITATION_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\[\d+(?:\s*[,–-]\s*\d+)*\]",
        r"\(\d{4}\)",
        r"\bet al\.",
        r"doi:\s*10\.",
        r"https://doi\.org",
    )
)


def validate(text: str, page_count: int | None = None) -> ValidationReport:
    """Run every check and report the first one that failed, if any."""
    trimmed = text.strip()
    lowered = trimmed.lower()

    keyword_matches = sum(1 for keyword in ACADEMIC_KEYWORDS if keyword in lowered)
    section_matches = sum(1 for pattern in SECTION_PATTERNS if pattern.search(trimmed))
    citation_matches = sum(1 for pattern in CITATION_PATTERNS if pattern.search(trimmed))

    reason: RejectionReason | None = None
    if len(trimmed) < MIN_TEXT_LENGTH:
        reason = RejectionReason.TOO_SHORT
    elif keyword_matches < MIN_KEYWORD_MATCHES:
        reason = RejectionReason.INSUFFICIENT_KEYWORDS
    elif section_matches < MIN_SECTION_MATCHES:
        reason = RejectionReason.INSUFFICIENT_SECTIONS
    elif citation_matches == 0:
        reason = RejectionReason.NO_CITATIONS

    report = ValidationReport(
        is_valid=reason is None,
        reason=reason,
        text_length=len(trimmed),
        keyword_matches=keyword_matches,
        section_matches=section_matches,
        citation_matches=citation_matches,
    )
    pages = f", {page_count} pages" if page_count is not None else ""
    Log.debug(
        f"Journal validation: {report.describe()} (keywords={keyword_matches}, "
        f"sections={section_matches}, citations={citation_matches}{pages})"
    )
    return report


def is_valid_journal(text: str, page_count: int | None = None) -> bool:
    return validate(text, page_count).is_valid


def ensure_valid_journal(text: str, page_count: int | None = None) -> ValidationReport:
    """Return the passing report.

    Raises:
        JournalValidationError: if any check fails.
    """
    report = validate(text, page_count)
    if not report.is_valid:
        raise JournalValidationError(report)
    return report
