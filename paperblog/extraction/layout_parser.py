import re

from paperblog.extraction.models import LayoutSection, SectionKind
from paperblog.logging.logger import Log

_MAX_HEADING_LENGTH = 80
_TERMINAL_PUNCTUATION = re.compile(r"[.!?]$")


class LayoutParser:
    """Splits extracted text into heading and paragraph sections.

    Page numbers are estimated: every ``chars_per_page`` characters of
    non-blank text advance the estimate by one, and a form-feed in a line
    starts a new page whose character count begins at zero.
    """

    def __init__(self, chars_per_page: int = 3000) -> None:
        if chars_per_page <= 0:
            raise ValueError(f"chars_per_page must be positive, got {chars_per_page}")
        self._chars_per_page = chars_per_page

    def parse(self, text: str) -> list[LayoutSection]:
        sections: list[LayoutSection] = []
        lines = text.split("\n")

        page_base = 0
        chars_on_page = 0
        current: LayoutSection | None = None

        for index, raw_line in enumerate(lines):
            line = raw_line.strip()
            if not line:
                # an empty page still ends the current one
                if "\f" in raw_line:
                    page_base += chars_on_page // self._chars_per_page + 1
                    chars_on_page = 0
                continue

            chars_on_page += len(line)
            page = page_base + chars_on_page // self._chars_per_page + 1
            if "\f" in raw_line:
                page += 1
                page_base = page - 1
                chars_on_page = 0

            next_line = lines[index + 1] if index + 1 < len(lines) else None
            if is_heading(line, next_line):
                if current is not None:
                    sections.append(current)
                current = None
                sections.append(
                    LayoutSection(
                        kind=SectionKind.HEADING,
                        content=line,
                        page_number=page,
                        heading_level=heading_level(line),
                    )
                )
            elif current is None:
                current = LayoutSection(kind=SectionKind.PARAGRAPH, content=line, page_number=page)
            else:
                current = LayoutSection(
                    kind=SectionKind.PARAGRAPH,
                    content=f"{current.content} {line}",
                    page_number=page,
                )

        if current is not None:
            sections.append(current)

        Log.debug(f"Parsed layout into {len(sections)} sections")
        return sections


def is_heading(line: str, next_raw_line: str | None) -> bool:
    """Whether a trimmed, non-blank line reads like a heading."""
    if len(line) >= _MAX_HEADING_LENGTH:
        return False
    if line == line.upper() and len(line) > 3:
        return True
    followed_by_blank = next_raw_line is None or not next_raw_line.strip()
    return not _TERMINAL_PUNCTUATION.search(line) and followed_by_blank


def heading_level(line: str) -> int:
    if len(line) < 30 and line == line.upper():
        return 1
    if len(line) < 50:
        return 2
    return 3
