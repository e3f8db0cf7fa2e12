from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from paperblog.authors.models import AuthorDetectionResult


class SectionKind(str, Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class LayoutSection:
    """One contiguous heading or paragraph unit of the linearized text."""

    kind: SectionKind
    content: str
    page_number: int
    heading_level: int | None = None


@dataclass(frozen=True)
class ExtractedImage:
    """An embedded raster image re-encoded as PNG.

    ``position_index`` is the image's identity for the rest of the pipeline
    and always equals its index in ``ExtractionResult.images``.
    """

    data: str  # base64-encoded payload
    alt_text: str
    page_number: int
    position_index: int
    mime_type: str = "image/png"
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class DocumentMetadata:
    page_count: int
    title: str | None = None
    author: str | None = None
    creation_date: datetime | None = None
    author_detection: AuthorDetectionResult | None = None


@dataclass(frozen=True)
class ExtractionResult:
    """Everything pulled out of one uploaded PDF."""

    text: str
    metadata: DocumentMetadata
    images: tuple[ExtractedImage, ...] = field(default_factory=tuple)
    layout: tuple[LayoutSection, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for index, image in enumerate(self.images):
            if image.position_index != index:
                raise ValueError(
                    f"Image at index {index} has position_index {image.position_index}"
                )
