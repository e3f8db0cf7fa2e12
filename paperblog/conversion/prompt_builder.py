"""Builds the multi-part blog conversion request.

The prompt text embeds document metadata, a language directive, the list
of available images and the serialized layout. Non-logo images follow the
prompt as inline parts, each with a short text label, in document order.
"""

import re
from collections.abc import Collection, Sequence
from pathlib import Path

from paperblog.ai.models import ContentPart, ImagePart, TextPart
from paperblog.ai.prompt_loader import load_prompt_template
from paperblog.authors.detector import format_authors
from paperblog.extraction.models import ExtractedImage, ExtractionResult, LayoutSection, SectionKind

ENGLISH = "English"
INDONESIAN = "Indonesian"
LANGUAGE_SAMPLE_CHARS = 1000

INDONESIAN_KEYWORDS: tuple[str, ...] = (
    "dan", "yang", "dengan", "untuk", "dari", "pada", "dalam", "adalah",
    "ini", "itu", "dapat", "akan", "tidak", "ada", "atau",
)
ENGLISH_KEYWORDS: tuple[str, ...] = (
    "the", "and", "for", "with", "this", "that", "from", "have", "been",
    "which", "their", "about",
)

_LANGUAGE_INSTRUCTIONS = {
    ENGLISH: "LANGUAGE: Write the blog post in ENGLISH (same as the source document).",
    INDONESIAN: (
        "BAHASA: Tulis blog post dalam BAHASA INDONESIA. "
        "Ini adalah target audiens utama."
    ),
}
_LANGUAGE_REQUIREMENTS = {
    ENGLISH: (
        "- Write ALL content (title, summary, headings, body text) in ENGLISH\n"
        "- Keep the same language as the source document\n"
        "- Use English terminology and expressions"
    ),
    INDONESIAN: (
        "- Tulis SEMUA konten (judul, ringkasan, heading, isi) dalam BAHASA INDONESIA\n"
        "- Gunakan bahasa yang natural dan mudah dipahami audiens Indonesia\n"
        "- Sesuaikan istilah teknis dengan konteks Indonesia"
    ),
}


def detect_language(text: str) -> str:
    """English when more English than Indonesian keywords occur (at least 3)."""
    sample = text[:LANGUAGE_SAMPLE_CHARS].lower()
    indonesian = _count_keywords(sample, INDONESIAN_KEYWORDS)
    english = _count_keywords(sample, ENGLISH_KEYWORDS)
    if english > indonesian and english >= 3:
        return ENGLISH
    return INDONESIAN


def format_layout(layout: Sequence[LayoutSection]) -> str:
    """Serialize sections with ``--- Page N ---`` and ``## heading`` markers."""
    current_page = 0
    chunks: list[str] = []
    for section in layout:
        chunk = ""
        if section.page_number > current_page:
            current_page = section.page_number
            chunk += f"\n--- Page {current_page} ---\n"
        if section.kind is SectionKind.HEADING:
            chunk += f"\n## {section.content}\n"
        else:
            chunk += section.content
        chunks.append(chunk)
    return "\n".join(chunks)


def format_image_list(
    images: Sequence[ExtractedImage],
    image_urls: Sequence[str],
    logo_indices: Collection[int] = (),
) -> str:
    lines = []
    for image in images:
        index = image.position_index
        url = image_urls[index] if index < len(image_urls) else "[pending]"
        line = (
            f"- Image {index + 1} (index {index}): From page {image.page_number}, "
            f"{_describe_size(image)} (URL will be: {url})"
        )
        if index in logo_indices:
            line += " LOGO - DO NOT include in content"
        lines.append(line)
    return "\n".join(lines)


class BlogPromptBuilder:
    """Assembles the prompt and content parts for one conversion."""

    def __init__(self, prompt_dir: Path | None = None) -> None:
        self._template = load_prompt_template("blog_prompt", prompt_dir)

    def build_prompt(
        self,
        extraction: ExtractionResult,
        image_urls: Sequence[str],
        logo_indices: Collection[int] = (),
    ) -> str:
        metadata = extraction.metadata
        language = detect_language(extraction.text)
        return self._template.format(
            title=metadata.title or "Untitled Document",
            author=self._author_line(extraction),
            page_count=metadata.page_count,
            section_count=len(extraction.layout),
            image_count=len(extraction.images),
            language=language,
            language_instruction=_LANGUAGE_INSTRUCTIONS[language],
            language_requirements=_LANGUAGE_REQUIREMENTS[language],
            image_instructions=self._image_instructions(extraction, image_urls, logo_indices),
            layout=format_layout(extraction.layout),
        )

    def build_parts(
        self,
        extraction: ExtractionResult,
        image_urls: Sequence[str],
        logo_indices: Collection[int] = (),
    ) -> list[ContentPart]:
        parts: list[ContentPart] = [TextPart(self.build_prompt(extraction, image_urls, logo_indices))]
        for image in extraction.images:
            if image.position_index in logo_indices or not image.data:
                continue
            parts.append(ImagePart(data=image.data, mime_type=image.mime_type))
            parts.append(
                TextPart(f"[Image {image.position_index + 1} from page {image.page_number}]")
            )
        return parts

    @staticmethod
    def _author_line(extraction: ExtractionResult) -> str:
        detection = extraction.metadata.author_detection
        if detection is not None and detection.authors:
            return format_authors(detection.authors)
        return extraction.metadata.author or "Unknown"

    @staticmethod
    def _image_instructions(
        extraction: ExtractionResult,
        image_urls: Sequence[str],
        logo_indices: Collection[int],
    ) -> str:
        if not extraction.images:
            return "- No images available for this document"
        lines = [
            f"You have {len(extraction.images)} images extracted from the document. "
            "They follow this prompt, each labeled with its number and page.",
            "",
            "Available images:",
            format_image_list(extraction.images, image_urls, logo_indices),
            "",
            "How to use images:",
            "- Put an image in the \"images\" array of the section it is most relevant to.",
            "- Reference images by 0-based index: index 0 for Image 1, index 1 for Image 2.",
            "- Match images to sections by page number, topic and visual relevance.",
            "- Distribute images across sections; place charts near the data they show.",
        ]
        for index in sorted(logo_indices):
            lines.append(
                f"- CRITICAL: Image {index + 1} is a LOGO. Do NOT include index {index} "
                "in any section's \"images\" array."
            )
        return "\n".join(lines)


def _count_keywords(sample: str, keywords: Sequence[str]) -> int:
    return sum(1 for word in keywords if re.search(rf"\b{word}\b", sample))


def _describe_size(image: ExtractedImage) -> str:
    if image.width and image.height:
        return f"{image.width}x{image.height}"
    return "unknown size"
