"""Builds a BlogDraft from the parsed AI reply, defaulting missing fields."""

from typing import Any

from paperblog.conversion.models import BlogDraft, BlogSection
from paperblog.logging.logger import Log

DEFAULT_TITLE = "Untitled Blog Post"


def validate_and_build(data: dict[str, Any]) -> BlogDraft:
    """Validate the loosely-typed reply and build a BlogDraft.

    Unusable values are replaced by defaults rather than rejected: a blank
    title becomes ``DEFAULT_TITLE``, non-string tags and non-integer image
    indices are dropped, and malformed sections are skipped.
    """
    return BlogDraft(
        title=_build_text(data.get("title")) or DEFAULT_TITLE,
        summary=_build_text(data.get("summary")),
        tags=_build_tags(data.get("tags")),
        sections=_build_sections(data.get("sections")),
    )


def _build_text(raw: Any) -> str:
    if not isinstance(raw, str):
        return ""
    return raw.strip()


def _build_tags(raw: Any) -> tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(tag.strip() for tag in raw if isinstance(tag, str) and tag.strip())


def _build_sections(raw: Any) -> tuple[BlogSection, ...]:
    if not isinstance(raw, list):
        if raw is not None:
            Log.warning(f"Ignoring 'sections' of type {type(raw).__name__}")
        return ()
    sections: list[BlogSection] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            Log.warning(f"Skipping section at index {index}: not an object")
            continue
        sections.append(
            BlogSection(
                heading=_build_text(item.get("heading")),
                content=item.get("content") if isinstance(item.get("content"), str) else "",
                images=_build_image_indices(item.get("images")),
            )
        )
    return tuple(sections)


def _build_image_indices(raw: Any) -> tuple[int, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(value for value in raw if isinstance(value, int) and not isinstance(value, bool))
