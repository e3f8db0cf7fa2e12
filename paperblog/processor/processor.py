from collections.abc import Sequence
from pathlib import Path

from paperblog.ai.factory import AIClientFactory
from paperblog.ai.rate_limiter import RateLimiter
from paperblog.authors.detector import AuthorDetector
from paperblog.config.settings import Settings
from paperblog.conversion.factory import BlogConverterFactory
from paperblog.extraction.layout_parser import LayoutParser
from paperblog.logging.logger import Log
from paperblog.pdf.factory import PdfExtractorFactory
from paperblog.processor.file_loader import FileLoader
from paperblog.processor.models import ProcessorResult
from paperblog.processor.pipeline import PipelineContext, PipelineStep
from paperblog.processor.steps import (
    BuildExtractionStep,
    ConvertToBlogStep,
    DetectAuthorsStep,
    ExtractImagesStep,
    ExtractTextStep,
    ParseLayoutStep,
    SelectThumbnailStep,
    SubstituteImagesStep,
    UploadImagesStep,
    ValidateJournalStep,
    VerifyAuthorshipStep,
)
from paperblog.storage.factory import ImageStorageFactory


class Processor:
    """Runs the PDF-to-blog pipeline.

    Pipeline: extract text -> validate -> extract images -> parse layout ->
    detect authors -> verify authorship -> upload images -> convert ->
    select thumbnail -> substitute image URLs.
    """

    def __init__(self, steps: Sequence[PipelineStep], file_loader: FileLoader | None = None) -> None:
        self._steps = list(steps)
        self._file_loader = file_loader or FileLoader()

    def process(
        self,
        pdf_bytes: bytes,
        *,
        user_name: str | None = None,
        user_email: str = "",
        alternative_names: Sequence[str] = (),
    ) -> ProcessorResult:
        """Convert one PDF; the first failing step's exception propagates."""
        Log.info(f"Processing PDF of {len(pdf_bytes)} bytes")
        context = PipelineContext(
            pdf_bytes=pdf_bytes,
            user_name=user_name,
            user_email=user_email,
            alternative_names=tuple(alternative_names),
        )
        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                Log.error(f"Step {type(step).__name__} failed: {exc}")
                raise

        if context.result is None:
            raise ValueError("Pipeline finished without a result")
        Log.info(f"Processing complete: '{context.result.blog.title}'")
        return context.result

    def process_file(
        self,
        path: str | Path,
        *,
        user_name: str | None = None,
        user_email: str = "",
        alternative_names: Sequence[str] = (),
    ) -> ProcessorResult:
        pdf_bytes = self._file_loader.load(path)
        Log.info(f"Loaded {len(pdf_bytes)} bytes from {path}")
        return self.process(
            pdf_bytes,
            user_name=user_name,
            user_email=user_email,
            alternative_names=alternative_names,
        )


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all adapters; one rate limiter serves every AI call."""
    client = AIClientFactory.create(settings)
    rate_limiter = RateLimiter(settings.ai_min_request_interval_seconds)
    converter = BlogConverterFactory.create(settings, client, rate_limiter)
    author_detector = AuthorDetector(
        client=client,
        rate_limiter=rate_limiter,
        sample_chars=settings.author_sample_chars,
    )
    steps: list[PipelineStep] = [
        ExtractTextStep(PdfExtractorFactory.create(settings)),
        ValidateJournalStep(),
        ExtractImagesStep(PdfExtractorFactory.create_image_extractor(settings)),
        ParseLayoutStep(LayoutParser(chars_per_page=settings.layout_chars_per_page)),
        DetectAuthorsStep(author_detector),
        VerifyAuthorshipStep(),
        BuildExtractionStep(),
        UploadImagesStep(ImageStorageFactory.create(settings)),
        ConvertToBlogStep(converter),
        SelectThumbnailStep(converter),
        SubstituteImagesStep(),
    ]
    return Processor(steps=steps, file_loader=FileLoader(settings.max_pdf_size_bytes))
