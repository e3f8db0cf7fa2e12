import re
from collections.abc import Sequence
from pathlib import Path

from paperblog.ai.client_base import BaseAIClient
from paperblog.ai.exceptions import AIError
from paperblog.ai.models import ContentPart, ImagePart, TextPart
from paperblog.ai.prompt_loader import load_prompt_template
from paperblog.ai.rate_limiter import RateLimiter
from paperblog.extraction.models import ExtractedImage
from paperblog.logging.logger import Log

_INDEX_RE = re.compile(r"-?\d+")


class LogoDetector:
    """Asks a vision model which extracted images are branding logos.

    Backends without vision support never see the images, so detection
    reports no logos for them.
    """

    def __init__(
        self,
        *,
        client: BaseAIClient,
        rate_limiter: RateLimiter,
        max_dimension_px: int = 300,
        temperature: float = 0.1,
        max_tokens: int = 64,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._rate_limiter = rate_limiter
        self._max_dimension_px = max_dimension_px
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._template = load_prompt_template("logo_prompt", prompt_dir)

    def detect(self, images: Sequence[ExtractedImage]) -> list[int]:
        """Return the position indices of logo images, possibly empty."""
        if not images:
            return []
        if not self._client.supports_vision:
            Log.debug("Logo detection skipped: AI backend has no vision support")
            return []

        self._rate_limiter.wait()
        try:
            raw = self._client.generate(
                self._build_parts(images),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except AIError as exc:
            Log.warning(f"Logo detection failed, assuming no logos: {exc}")
            return []

        Log.debug(f"Logo detection response: {raw.strip()[:200]}")
        logos = self.parse_indices(raw, images)
        if logos:
            Log.info(f"Detected logo images at indices {logos}")
        return logos

    def parse_indices(self, raw: str, images: Sequence[ExtractedImage]) -> list[int]:
        """Keep in-range candidates that are on page 1 or small in both dimensions."""
        logos: list[int] = []
        for token in _INDEX_RE.findall(raw):
            index = int(token)
            if index < 0:
                continue
            if index >= len(images):
                Log.warning(f"Discarding logo index {index}: only {len(images)} images")
                continue
            if index in logos:
                continue
            if not self._plausible_logo(images[index]):
                image = images[index]
                Log.warning(
                    f"Discarding logo index {index}: page {image.page_number}, "
                    f"{image.width}x{image.height} is too large for a logo"
                )
                continue
            logos.append(index)
        return logos

    def _plausible_logo(self, image: ExtractedImage) -> bool:
        if image.page_number == 1:
            return True
        return (
            image.width is not None
            and image.height is not None
            and image.width < self._max_dimension_px
            and image.height < self._max_dimension_px
        )

    def _build_parts(self, images: Sequence[ExtractedImage]) -> list[ContentPart]:
        image_list = "\n".join(
            f"- Image {image.position_index}: page {image.page_number}, "
            f"{image.width or '?'}x{image.height or '?'} px"
            for image in images
        )
        parts: list[ContentPart] = [TextPart(self._template.format(image_list=image_list))]
        for image in images:
            parts.append(ImagePart(data=image.data, mime_type=image.mime_type))
            parts.append(TextPart(f"[This is Image {image.position_index}]"))
        return parts
