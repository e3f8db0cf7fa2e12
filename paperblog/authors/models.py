from dataclasses import dataclass, field
from enum import Enum


class AuthorSource(str, Enum):
    METADATA = "metadata"
    AI_EXTRACTION = "ai_extraction"
    BOTH = "both"


class AuthorMatchType(str, Enum):
    """Which rule matched a user to a detected author."""

    EXACT_NAME = "exact_name"
    NAME_CONTAINED = "name_contained"
    NAME_CONTAINED_REVERSE = "name_contained_reverse"
    EMAIL = "email_match"
    ALTERNATIVE_NAME = "alternative_name"
    INITIALS = "initials_match"


@dataclass(frozen=True)
class DetectedAuthor:
    """A single author found in the document."""

    name: str
    confidence: int
    affiliation: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class AuthorDetectionResult:
    """Output of the author detector.

    ``authors`` holds at most three entries, highest confidence first;
    ``total_authors_found`` is the count before truncation.
    """

    authors: tuple[DetectedAuthor, ...] = field(default_factory=tuple)
    source: AuthorSource = AuthorSource.METADATA
    total_authors_found: int = 0


@dataclass(frozen=True)
class AuthorMatch:
    author: DetectedAuthor
    match_type: AuthorMatchType
