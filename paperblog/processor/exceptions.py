class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class FileReadError(ProcessorError):
    """Raised when a PDF file cannot be read from disk."""


class PdfTooLargeError(ProcessorError):
    """Raised when a PDF exceeds the configured size limit."""


class AuthorshipError(ProcessorError):
    """Raised when the uploading user matches none of the detected authors."""
