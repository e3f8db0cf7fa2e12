"""Two-tier author detection: document-info metadata and AI extraction."""

import json
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from paperblog.ai.client_base import BaseAIClient
from paperblog.ai.exceptions import AIError
from paperblog.ai.models import TextPart
from paperblog.ai.prompt_loader import load_prompt_template
from paperblog.ai.rate_limiter import RateLimiter
from paperblog.authors.exceptions import AuthorDetectionError
from paperblog.authors.models import (
    AuthorDetectionResult,
    AuthorMatch,
    AuthorMatchType,
    AuthorSource,
    DetectedAuthor,
)
from paperblog.logging.logger import Log

METADATA_CONFIDENCE = 70
DEFAULT_AI_CONFIDENCE = 50
AI_PREFERRED_CONFIDENCE = 80
AI_MIN_CONFIDENCE = 70
MAX_METADATA_AUTHORS = 3
MAX_AI_AUTHORS = 10
MAX_REPORTED_AUTHORS = 3

_METADATA_SPLIT_RE = re.compile(r"[,;&]|\s+and\s+", re.IGNORECASE)
_INVALID_AUTHOR_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"^corresponding\s*(email|author)?$",
        r"^email$",
        r"^authors?$",
        r"^unknown$",
        r"^n/a$",
    )
)
_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*([\[{][\s\S]*?[\]}])\s*```")
_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


class AuthorDetector:
    """Finds the authors of a paper from its metadata and first page."""

    def __init__(
        self,
        *,
        client: BaseAIClient,
        rate_limiter: RateLimiter,
        sample_chars: int = 5000,
        temperature: float = 0.3,
        max_tokens: int = 2048,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._rate_limiter = rate_limiter
        self._sample_chars = sample_chars
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._prompt_template = load_prompt_template("author_prompt", prompt_dir)

    def detect_authors(
        self, full_text: str, metadata_author: str | None = None
    ) -> AuthorDetectionResult:
        """Detect up to three authors, highest confidence first.

        Raises:
            AuthorDetectionError: if the AI step failed and the metadata
                yielded no usable author.
        """
        metadata_authors = parse_metadata_authors(metadata_author)
        try:
            ai_authors = self._extract_with_ai(full_text)
        except (AIError, AuthorDetectionError) as exc:
            if metadata_authors:
                Log.warning(f"AI author detection failed, using metadata authors: {exc}")
                return _build_result(metadata_authors, AuthorSource.METADATA)
            raise AuthorDetectionError(f"Author detection failed: {exc}") from exc

        merged = merge_authors(metadata_authors, ai_authors)
        if metadata_authors and ai_authors:
            source = AuthorSource.BOTH
        elif ai_authors:
            source = AuthorSource.AI_EXTRACTION
        else:
            source = AuthorSource.METADATA
        result = _build_result(merged, source)
        Log.info(
            f"Detected {result.total_authors_found} authors (source={result.source.value})"
        )
        return result

    def _extract_with_ai(self, full_text: str) -> list[DetectedAuthor]:
        prompt = self._prompt_template.format(
            content_sample=full_text[: self._sample_chars],
            max_authors=MAX_AI_AUTHORS,
        )
        self._rate_limiter.wait()
        raw = self._client.generate(
            [TextPart(prompt)],
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            json_output=True,
        )
        Log.debug(f"AI author extraction response:\n{raw[:500]}")
        authors = parse_ai_authors(raw)
        Log.debug(f"AI detected {len(authors)} authors")
        return authors


def parse_metadata_authors(metadata_author: str | None) -> list[DetectedAuthor]:
    """Split a document-info author string into at most three authors."""
    if not metadata_author or not metadata_author.strip():
        return []
    if _is_placeholder(metadata_author.strip()):
        Log.debug(f"Ignoring placeholder metadata author: {metadata_author!r}")
        return []

    authors: list[DetectedAuthor] = []
    for name in _METADATA_SPLIT_RE.split(metadata_author):
        name = name.strip()
        if len(name) < 2 or _is_placeholder(name):
            continue
        authors.append(DetectedAuthor(name=name, confidence=METADATA_CONFIDENCE))
    return authors[:MAX_METADATA_AUTHORS]


def parse_ai_authors(raw: str) -> list[DetectedAuthor]:
    """Read authors from an AI reply.

    Accepts a bare array, an ``{"authors": [...]}`` object, a single author
    object, or any of these wrapped in prose or code fences.

    Raises:
        AuthorDetectionError: if no JSON can be found in the reply.
    """
    payload = _load_json(raw)
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict) and isinstance(payload.get("authors"), list):
        items = payload["authors"]
    elif isinstance(payload, dict) and payload.get("name"):
        items = [payload]
    else:
        Log.warning(f"Unrecognized AI author reply: {json.dumps(payload)[:200]}")
        return []

    authors = [author for author in map(_build_author, items) if author is not None]
    authors.sort(key=lambda author: author.confidence, reverse=True)
    return authors[:MAX_AI_AUTHORS]


def merge_authors(
    metadata_authors: Sequence[DetectedAuthor], ai_authors: Sequence[DetectedAuthor]
) -> list[DetectedAuthor]:
    """Combine both sources, preferring confident AI results."""
    if ai_authors and ai_authors[0].confidence >= AI_PREFERRED_CONFIDENCE:
        return list(ai_authors)
    if metadata_authors and (not ai_authors or ai_authors[0].confidence < AI_MIN_CONFIDENCE):
        return list(metadata_authors)

    combined = list(ai_authors)
    for candidate in metadata_authors:
        if not any(is_same_person(existing.name, candidate.name) for existing in combined):
            combined.append(candidate)
    combined.sort(key=lambda author: author.confidence, reverse=True)
    return combined


def is_same_person(first: str, second: str) -> bool:
    """Exact or contained name, or same last name and first initial."""
    a = _normalize_name(first)
    b = _normalize_name(second)
    if not a or not b:
        return False
    if a == b or a in b or b in a:
        return True

    parts_a = a.split()
    parts_b = b.split()
    return (
        len(parts_a) >= 2
        and len(parts_b) >= 2
        and parts_a[-1] == parts_b[-1]
        and parts_a[0][0] == parts_b[0][0]
    )


def format_authors(authors: Sequence[DetectedAuthor]) -> str:
    """Render names as ``A``, ``A and B``, ``A, B, and C`` or ``A, B, C, et al.``."""
    names = [author.name for author in authors]
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return f"{names[0]} and {names[1]}"
    if len(names) > 3:
        return f"{', '.join(names[:3])}, et al."
    return f"{names[0]}, {names[1]}, and {names[2]}"


def find_matching_author(
    authors: Sequence[DetectedAuthor],
    user_name: str,
    user_email: str = "",
    alternative_names: Sequence[str] = (),
) -> AuthorMatch | None:
    """Return the first detected author that matches the user, if any.

    Rules are tried per author in order: exact name, author name contains
    user name, user name contains author name, email, alternative names,
    then same last name with a matching initial.
    """
    name = user_name.lower().strip()
    email = user_email.lower().strip()
    alternatives = [alt.lower().strip() for alt in alternative_names if alt.strip()]

    for author in authors:
        author_name = author.name.lower().strip()
        author_email = (author.email or "").lower().strip()

        if name:
            if author_name == name:
                return AuthorMatch(author, AuthorMatchType.EXACT_NAME)
            if name in author_name:
                return AuthorMatch(author, AuthorMatchType.NAME_CONTAINED)
            if author_name in name:
                return AuthorMatch(author, AuthorMatchType.NAME_CONTAINED_REVERSE)
        if email and author_email == email:
            return AuthorMatch(author, AuthorMatchType.EMAIL)
        if any(alt in author_name for alt in alternatives):
            return AuthorMatch(author, AuthorMatchType.ALTERNATIVE_NAME)
        if name and _initials_match(name, author_name):
            return AuthorMatch(author, AuthorMatchType.INITIALS)
    return None


def _initials_match(first: str, second: str) -> bool:
    parts_a = first.split()
    parts_b = second.split()
    if len(parts_a) < 2 or len(parts_b) < 2 or parts_a[-1] != parts_b[-1]:
        return False
    given_a, given_b = parts_a[0], parts_b[0]
    return (len(given_a) <= 2 and given_a[0] == given_b[0]) or (
        len(given_b) <= 2 and given_b[0] == given_a[0]
    )


def _build_result(authors: Sequence[DetectedAuthor], source: AuthorSource) -> AuthorDetectionResult:
    return AuthorDetectionResult(
        authors=tuple(authors[:MAX_REPORTED_AUTHORS]),
        source=source,
        total_authors_found=len(authors),
    )


def _build_author(raw: Any) -> DetectedAuthor | None:
    if not isinstance(raw, dict):
        return None
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        return None
    return DetectedAuthor(
        name=name.strip(),
        confidence=_clamp_confidence(raw.get("confidence")),
        affiliation=_optional_str(raw.get("affiliation")),
        email=_optional_str(raw.get("email")),
    )


def _clamp_confidence(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or not raw:
        return DEFAULT_AI_CONFIDENCE
    return int(min(100, max(0, round(raw))))


def _optional_str(raw: Any) -> str | None:
    if not isinstance(raw, str):
        return None
    return raw.strip() or None


def _is_placeholder(value: str) -> bool:
    return any(pattern.match(value) for pattern in _INVALID_AUTHOR_PATTERNS)


def _normalize_name(name: str) -> str:
    return re.sub(r"[.,]", "", name.lower()).strip()


def _load_json(raw: str) -> Any:
    text = raw.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    for pattern in (_FENCED_JSON_RE, _ARRAY_RE, _OBJECT_RE):
        match = pattern.search(text)
        if match is None:
            continue
        try:
            return json.loads(match.group(match.lastindex or 0))
        except json.JSONDecodeError:
            continue
    raise AuthorDetectionError("Could not extract JSON from AI author reply")
