from dataclasses import replace

from paperblog.authors.detector import AuthorDetector, find_matching_author, format_authors
from paperblog.authors.exceptions import AuthorDetectionError
from paperblog.conversion.base import BaseBlogConverter
from paperblog.conversion.html_renderer import substitute_placeholders
from paperblog.extraction.layout_parser import LayoutParser
from paperblog.extraction.models import DocumentMetadata, ExtractionResult
from paperblog.logging.logger import Log
from paperblog.pdf.base import BasePdfExtractor
from paperblog.pdf.image_extractor import ImageExtractor
from paperblog.processor.exceptions import AuthorshipError
from paperblog.processor.models import ProcessorResult
from paperblog.processor.pipeline import PipelineContext, PipelineStep
from paperblog.storage.base import BaseImageStorage
from paperblog.validation.journal_validator import ensure_valid_journal


class ExtractTextStep(PipelineStep):
    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.pdf_text = self._pdf_extractor.extract(context.pdf_bytes)
        Log.info(
            f"Extracted {len(context.pdf_text.text)} chars from "
            f"{context.pdf_text.page_count} pages"
        )
        return context


class ValidateJournalStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.pdf_text is None:
            raise ValueError("PipelineContext.pdf_text must be set before validation")
        context.validation = ensure_valid_journal(
            context.pdf_text.text, context.pdf_text.page_count
        )
        Log.info("Document accepted as a journal article")
        return context


class ExtractImagesStep(PipelineStep):
    def __init__(self, image_extractor: ImageExtractor) -> None:
        self._image_extractor = image_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.images = self._image_extractor.extract(context.pdf_bytes)
        return context


class ParseLayoutStep(PipelineStep):
    def __init__(self, layout_parser: LayoutParser) -> None:
        self._layout_parser = layout_parser

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.pdf_text is None:
            raise ValueError("PipelineContext.pdf_text must be set before layout parsing")
        context.layout = self._layout_parser.parse(context.pdf_text.text)
        return context


class DetectAuthorsStep(PipelineStep):
    """Detects authors; a failure leaves the author blank instead of aborting."""

    def __init__(self, author_detector: AuthorDetector) -> None:
        self._author_detector = author_detector

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.pdf_text is None:
            raise ValueError("PipelineContext.pdf_text must be set before author detection")
        try:
            context.author_detection = self._author_detector.detect_authors(
                context.pdf_text.text, context.pdf_text.author
            )
        except AuthorDetectionError as exc:
            Log.warning(f"Continuing without authors: {exc}")
            context.author_detection = None
        return context


class VerifyAuthorshipStep(PipelineStep):
    """Rejects the upload when a user is given and matches no detected author."""

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.user_name:
            return context
        detection = context.author_detection
        if detection is None or not detection.authors:
            Log.warning("No authors detected, skipping authorship check")
            return context

        match = find_matching_author(
            detection.authors,
            context.user_name,
            context.user_email,
            context.alternative_names,
        )
        if match is None:
            raise AuthorshipError(
                f"User '{context.user_name}' is not among the detected authors: "
                f"{format_authors(detection.authors)}"
            )
        Log.info(f"User matched author '{match.author.name}' ({match.match_type.value})")
        return context


class BuildExtractionStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.pdf_text is None:
            raise ValueError("PipelineContext.pdf_text must be set before building extraction")
        pdf_text = context.pdf_text
        context.extraction = ExtractionResult(
            text=pdf_text.text,
            metadata=DocumentMetadata(
                page_count=pdf_text.page_count,
                title=pdf_text.title,
                author=pdf_text.author,
                creation_date=pdf_text.creation_date,
                author_detection=context.author_detection,
            ),
            images=tuple(context.images),
            layout=tuple(context.layout),
        )
        return context


class UploadImagesStep(PipelineStep):
    def __init__(self, storage: BaseImageStorage) -> None:
        self._storage = storage

    def run(self, context: PipelineContext) -> PipelineContext:
        context.image_urls = self._storage.upload_many(context.images)
        return context


class ConvertToBlogStep(PipelineStep):
    def __init__(self, converter: BaseBlogConverter) -> None:
        self._converter = converter

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before conversion")
        context.conversion = self._converter.convert_to_blog(
            context.extraction, context.image_urls
        )
        return context


class SelectThumbnailStep(PipelineStep):
    """Lets the AI pick the thumbnail among the non-logo images."""

    def __init__(self, converter: BaseBlogConverter) -> None:
        self._converter = converter

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.conversion is None:
            raise ValueError("PipelineContext.conversion must be set before thumbnail selection")
        conversion = context.conversion
        logos = set(conversion.logo_indices)
        candidates = [
            (image, url)
            for image, url in zip(context.images, context.image_urls)
            if image.position_index not in logos
        ]
        if not candidates:
            return context

        thumbnail_url = self._converter.select_best_thumbnail(
            conversion.title,
            conversion.summary,
            [image for image, _ in candidates],
            [url for _, url in candidates],
        )
        if thumbnail_url is not None:
            context.conversion = replace(conversion, thumbnail_url=thumbnail_url)
        return context


class SubstituteImagesStep(PipelineStep):
    """Swaps ``{{IMAGE_i}}`` placeholders for uploaded URLs and builds the result."""

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.conversion is None or context.extraction is None:
            raise ValueError("PipelineContext.conversion must be set before substitution")
        blog = replace(
            context.conversion,
            content=substitute_placeholders(context.conversion.content, context.image_urls),
            image_urls=tuple(context.image_urls),
        )
        detection = context.extraction.metadata.author_detection
        context.result = ProcessorResult(
            blog=blog,
            metadata=context.extraction.metadata,
            authors=format_authors(detection.authors) if detection else "",
        )
        return context
