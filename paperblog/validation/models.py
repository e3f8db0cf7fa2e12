from dataclasses import dataclass
from enum import Enum


class RejectionReason(str, Enum):
    TOO_SHORT = "too_short"
    INSUFFICIENT_KEYWORDS = "insufficient_keywords"
    INSUFFICIENT_SECTIONS = "insufficient_sections"
    NO_CITATIONS = "no_citations"


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of the journal-format checks.

    ``reason`` names the first failing check and is ``None`` when the text
    passed all of them.
    """

    is_valid: bool
    reason: RejectionReason | None
    text_length: int
    keyword_matches: int
    section_matches: int
    citation_matches: int

    def describe(self) -> str:
        if self.reason is None:
            return "accepted"
        if self.reason is RejectionReason.TOO_SHORT:
            return f"text too short ({self.text_length} characters)"
        if self.reason is RejectionReason.INSUFFICIENT_KEYWORDS:
            return f"only {self.keyword_matches} academic keywords found"
        if self.reason is RejectionReason.INSUFFICIENT_SECTIONS:
            return f"only {self.section_matches} standard sections found"
        return "no citations or references found"
