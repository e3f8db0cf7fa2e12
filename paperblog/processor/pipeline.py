from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from paperblog.authors.models import AuthorDetectionResult
from paperblog.conversion.models import BlogConversionResult
from paperblog.extraction.models import ExtractedImage, ExtractionResult, LayoutSection
from paperblog.pdf.models import PdfText
from paperblog.processor.models import ProcessorResult
from paperblog.validation.models import ValidationReport


@dataclass(slots=True)
class PipelineContext:
    pdf_bytes: bytes
    user_name: str | None = None
    user_email: str = ""
    alternative_names: tuple[str, ...] = ()
    pdf_text: PdfText | None = None
    validation: ValidationReport | None = None
    images: list[ExtractedImage] = field(default_factory=list)
    layout: list[LayoutSection] = field(default_factory=list)
    author_detection: AuthorDetectionResult | None = None
    extraction: ExtractionResult | None = None
    image_urls: list[str] = field(default_factory=list)
    conversion: BlogConversionResult | None = None
    result: ProcessorResult | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
