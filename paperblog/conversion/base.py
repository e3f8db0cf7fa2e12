from abc import ABC, abstractmethod
from collections.abc import Sequence

from paperblog.conversion.models import BlogConversionResult
from paperblog.extraction.models import ExtractedImage, ExtractionResult


class BaseBlogConverter(ABC):
    """Contract for turning an extraction into a blog post."""

    @abstractmethod
    def convert_to_blog(
        self, extraction: ExtractionResult, image_urls: Sequence[str]
    ) -> BlogConversionResult:
        """Generate the blog post for an extracted PDF.

        Args:
            extraction: Text, layout, images and metadata of the PDF.
            image_urls: Uploaded URL of each extracted image, by position index.

        Returns:
            The conversion result. Its ``content`` still carries
            ``{{IMAGE_i}}`` placeholders.

        Raises:
            ConversionError: if the backend call fails or its reply cannot
                be parsed.
        """

    @abstractmethod
    def detect_logos(self, images: Sequence[ExtractedImage]) -> list[int]:
        """Return position indices of logo images; never raises."""

    @abstractmethod
    def select_best_thumbnail(
        self,
        title: str,
        summary: str,
        images: Sequence[ExtractedImage],
        image_urls: Sequence[str],
    ) -> str | None:
        """Pick the thumbnail URL among ``image_urls``; never raises."""
