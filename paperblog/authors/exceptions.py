class AuthorDetectionError(Exception):
    """Raised when authors could not be detected from any source."""
