class ConversionError(Exception):
    """Raised when a PDF extraction cannot be turned into a blog post."""


class BlogResponseParseError(ConversionError):
    """Raised when the AI reply cannot be parsed as a blog, even after repair."""
