import html
from collections.abc import Iterable, Sequence

from paperblog.conversion.models import BlogSection

IMAGE_PLACEHOLDER = "{{{{IMAGE_{index}}}}}"


def image_placeholder(index: int) -> str:
    """The ``{{IMAGE_<index>}}`` token the caller swaps for the final URL."""
    return IMAGE_PLACEHOLDER.format(index=index)


def render_sections(sections: Iterable[BlogSection]) -> str:
    """Render sections as ``<h2>``/``<div>`` blocks followed by their images."""
    return "\n".join(_render_section(section) for section in sections)


def substitute_placeholders(content: str, image_urls: Sequence[str]) -> str:
    """Replace every ``{{IMAGE_i}}`` with ``image_urls[i]``."""
    for index, url in enumerate(image_urls):
        content = content.replace(image_placeholder(index), url)
    return content


def _render_section(section: BlogSection) -> str:
    heading = html.escape(section.heading, quote=False)
    parts = [f"<h2>{heading}</h2>\n<div>{section.content}</div>"]
    alt = html.escape(f"Image from section: {section.heading}")
    for index in section.images:
        parts.append(f'<img src="{image_placeholder(index)}" alt="{alt}" class="blog-image" />')
    return "\n".join(parts)
