from dataclasses import dataclass, field


@dataclass(frozen=True)
class BlogSection:
    """One generated section.

    ``images`` holds position indices into the original extracted image
    sequence.
    """

    heading: str
    content: str
    images: tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class BlogDraft:
    """The validated AI reply, before logo reconciliation and rendering."""

    title: str
    summary: str
    tags: tuple[str, ...]
    sections: tuple[BlogSection, ...]


@dataclass(frozen=True)
class BlogConversionResult:
    title: str
    content: str
    summary: str
    tags: tuple[str, ...] = field(default_factory=tuple)
    sections: tuple[BlogSection, ...] = field(default_factory=tuple)
    image_urls: tuple[str, ...] = field(default_factory=tuple)
    thumbnail_url: str | None = None
    logo_url: str | None = None
    logo_urls: tuple[str, ...] = field(default_factory=tuple)
    logo_indices: tuple[int, ...] = field(default_factory=tuple)
