"""AI-driven blog conversion of an extracted PDF."""

import json
import re
from collections.abc import Collection, Sequence
from pathlib import Path

from paperblog.ai.client_base import BaseAIClient
from paperblog.ai.exceptions import AIError
from paperblog.ai.models import ContentPart, ImagePart, TextPart
from paperblog.ai.prompt_loader import load_prompt_template
from paperblog.ai.rate_limiter import RateLimiter
from paperblog.conversion.base import BaseBlogConverter
from paperblog.conversion.exceptions import ConversionError
from paperblog.conversion.html_renderer import render_sections
from paperblog.conversion.logo_detector import LogoDetector
from paperblog.conversion.models import BlogConversionResult, BlogSection
from paperblog.conversion.prompt_builder import BlogPromptBuilder
from paperblog.conversion.response_parser import parse_blog_response, strip_code_fences
from paperblog.conversion.validator import validate_and_build
from paperblog.extraction.models import ExtractedImage, ExtractionResult
from paperblog.logging.logger import Log

_LEADING_INT_RE = re.compile(r"^[+-]?\d+")


class BlogConverter(BaseBlogConverter):
    """Converts extracted PDFs into blog posts with a generative backend."""

    def __init__(
        self,
        *,
        client: BaseAIClient,
        rate_limiter: RateLimiter,
        logo_detector: LogoDetector,
        temperature: float = 0.7,
        max_tokens: int = 8192,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._rate_limiter = rate_limiter
        self._logo_detector = logo_detector
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._prompt_builder = BlogPromptBuilder(prompt_dir)
        self._thumbnail_template = load_prompt_template("thumbnail_prompt", prompt_dir)

    def convert_to_blog(
        self, extraction: ExtractionResult, image_urls: Sequence[str]
    ) -> BlogConversionResult:
        logo_indices: list[int] = []
        if extraction.images and image_urls:
            logo_indices = self.detect_logos(extraction.images)

        parts = self._prompt_builder.build_parts(extraction, image_urls, logo_indices)
        if Log.is_debug() and isinstance(parts[0], TextPart):
            Log.debug(f"Blog conversion prompt:\n{parts[0].text}")

        self._rate_limiter.wait()
        try:
            raw = self._client.generate(
                parts,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                json_output=True,
            )
        except AIError as exc:
            raise ConversionError(f"Blog conversion failed: {exc}") from exc
        Log.debug(f"AI raw response:\n{raw}")

        draft = validate_and_build(parse_blog_response(raw))
        sections = reconcile_section_images(draft.sections, logo_indices, len(extraction.images))

        logo_urls = tuple(image_urls[i] for i in logo_indices if i < len(image_urls))
        thumbnail_url = next(
            (url for i, url in enumerate(image_urls) if i not in logo_indices), None
        )
        result = BlogConversionResult(
            title=draft.title,
            content=render_sections(sections),
            summary=draft.summary,
            tags=draft.tags,
            sections=sections,
            image_urls=tuple(image_urls),
            thumbnail_url=thumbnail_url,
            logo_url=logo_urls[0] if logo_urls else None,
            logo_urls=logo_urls,
            logo_indices=tuple(logo_indices),
        )
        Log.info(
            f"Blog conversion complete: '{result.title}', {len(sections)} sections, "
            f"{len(logo_indices)} logos excluded"
        )
        return result

    def detect_logos(self, images: Sequence[ExtractedImage]) -> list[int]:
        return self._logo_detector.detect(images)

    def select_best_thumbnail(
        self,
        title: str,
        summary: str,
        images: Sequence[ExtractedImage],
        image_urls: Sequence[str],
    ) -> str | None:
        if not images or not image_urls:
            return None
        if len(images) == 1:
            return image_urls[0]

        candidate_count = min(len(images), len(image_urls))
        self._rate_limiter.wait()
        try:
            raw = self._client.generate(
                self._thumbnail_parts(title, summary, images),
                temperature=0.2,
                max_tokens=16,
            )
        except AIError as exc:
            Log.warning(f"Thumbnail selection failed, using first image: {exc}")
            return image_urls[0]

        index = parse_thumbnail_index(raw)
        if index is None or not 0 <= index < candidate_count:
            Log.warning(f"Invalid thumbnail selection: {raw.strip()[:50]!r}. Using first image.")
            return image_urls[0]
        Log.debug(f"AI selected image {index} as thumbnail")
        return image_urls[index]

    def _thumbnail_parts(
        self, title: str, summary: str, images: Sequence[ExtractedImage]
    ) -> list[ContentPart]:
        image_list = "\n".join(
            f"- Image {i}: From page {image.page_number}, "
            f"{image.width or '?'}x{image.height or '?'} px"
            for i, image in enumerate(images)
        )
        prompt = self._thumbnail_template.format(
            title=title,
            summary=summary,
            image_list=image_list,
            max_index=len(images) - 1,
        )
        parts: list[ContentPart] = [TextPart(prompt)]
        for i, image in enumerate(images):
            parts.append(ImagePart(data=image.data, mime_type=image.mime_type))
            parts.append(TextPart(f"[This is Image {i}]"))
        return parts


def reconcile_section_images(
    sections: Sequence[BlogSection],
    logo_indices: Collection[int],
    image_count: int,
) -> tuple[BlogSection, ...]:
    """Drop logo and out-of-range indices from each section, keeping the rest as-is."""
    reconciled: list[BlogSection] = []
    for section in sections:
        kept: list[int] = []
        for index in section.images:
            if index in logo_indices:
                continue
            if not 0 <= index < image_count:
                Log.warning(
                    f"Dropping image index {index} from section '{section.heading}': "
                    f"only {image_count} images"
                )
                continue
            kept.append(index)
        reconciled.append(
            BlogSection(heading=section.heading, content=section.content, images=tuple(kept))
        )
    return tuple(reconciled)


def parse_thumbnail_index(raw: str) -> int | None:
    """Read the chosen index from a bare number or an ``{"index": n}`` object."""
    text = strip_code_fences(raw)
    if text.startswith("{"):
        try:
            payload = json.loads(text)
        except json.JSONDecodeError:
            return None
        value = payload.get("index") if isinstance(payload, dict) else None
        return value if isinstance(value, int) and not isinstance(value, bool) else None
    match = _LEADING_INT_RE.match(text)
    return int(match.group()) if match else None
