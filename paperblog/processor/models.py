from dataclasses import dataclass

from paperblog.conversion.models import BlogConversionResult
from paperblog.extraction.models import DocumentMetadata


@dataclass(frozen=True)
class ProcessorResult:
    """Final blog post with image URLs substituted, plus document metadata."""

    blog: BlogConversionResult
    metadata: DocumentMetadata
    authors: str = ""
