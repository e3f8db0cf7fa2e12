"""Embedded raster image extraction.

Processing flow per page:
1. Interpret the page content stream and collect every image paint
   (image XObjects and inline images) in paint order.
2. Resolve each painted image to a pixel buffer on a worker thread that
   owns its own document handle, waiting at most ``resolve_timeout_seconds``.
   A worker that overran is abandoned and the next image gets a new one.
3. Expand the buffer to RGBA according to its colour-space kind.
4. Re-encode as PNG and record page, position and dimensions.

Failures of a single page or image are logged and skipped; ``extract``
never raises.
"""

import base64
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from enum import IntEnum

import pymupdf

from paperblog.extraction.models import ExtractedImage
from paperblog.logging.logger import Log

_BBOX_TOLERANCE = 1.0


class ImageKind(IntEnum):
    """Colour-space kind of a decoded image buffer."""

    GRAYSCALE = 1
    RGB = 2
    RGBA = 3

    @property
    def channels(self) -> int:
        return {ImageKind.GRAYSCALE: 1, ImageKind.RGB: 3, ImageKind.RGBA: 4}[self]


@dataclass(frozen=True)
class PaintOperation:
    """One image paint found in a page's content stream."""

    xref: int
    bbox: tuple[float, float, float, float]
    inline_data: bytes | None = None

    @property
    def label(self) -> str:
        return f"xref {self.xref}" if self.xref else "inline image"


@dataclass(frozen=True)
class RawImage:
    width: int
    height: int
    kind: ImageKind
    samples: bytes


def to_rgba(samples: bytes, kind: ImageKind, width: int, height: int) -> bytes:
    """Expand a GRAYSCALE, RGB or RGBA buffer to RGBA with opaque alpha.

    Raises:
        ValueError: if the buffer is shorter than ``width * height`` pixels.
    """
    pixel_count = width * height
    expected = pixel_count * kind.channels
    if pixel_count <= 0 or len(samples) < expected:
        raise ValueError(
            f"pixel buffer has {len(samples)} bytes, expected {expected} "
            f"for {width}x{height} {kind.name}"
        )
    src = bytes(samples[:expected])
    if kind is ImageKind.RGBA:
        return src

    out = bytearray(pixel_count * 4)
    if kind is ImageKind.GRAYSCALE:
        out[0::4] = src
        out[1::4] = src
        out[2::4] = src
    else:
        out[0::4] = src[0::3]
        out[1::4] = src[1::3]
        out[2::4] = src[2::3]
    out[3::4] = b"\xff" * pixel_count
    return bytes(out)


def encode_png(rgba: bytes, width: int, height: int) -> bytes:
    """Rasterize an RGBA buffer into a standalone pixmap and encode it as PNG."""
    pixmap = pymupdf.Pixmap(pymupdf.csRGB, width, height, rgba, True)
    return pixmap.tobytes("png")


def classify_pixmap(pixmap: pymupdf.Pixmap) -> ImageKind | None:
    colour_channels = pixmap.n - int(bool(pixmap.alpha))
    if colour_channels == 1 and not pixmap.alpha:
        return ImageKind.GRAYSCALE
    if colour_channels == 3:
        return ImageKind.RGBA if pixmap.alpha else ImageKind.RGB
    return None


class _ResolverWorker:
    """A single resolver thread with its own handle on the document.

    The handle is opened lazily on the worker thread and never touched by
    the caller. A worker whose resolution overran its timeout is abandoned
    together with its handle, and the next image gets a fresh worker.
    """

    def __init__(self, pdf_bytes: bytes) -> None:
        self._pdf_bytes = pdf_bytes
        self._doc: pymupdf.Document | None = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pdf-image")

    def submit(
        self,
        resolve: Callable[[pymupdf.Document, PaintOperation], RawImage | None],
        operation: PaintOperation,
    ) -> Future[RawImage | None]:
        return self._executor.submit(self._run, resolve, operation)

    def _run(
        self,
        resolve: Callable[[pymupdf.Document, PaintOperation], RawImage | None],
        operation: PaintOperation,
    ) -> RawImage | None:
        if self._doc is None:
            self._doc = pymupdf.open(stream=self._pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        return resolve(self._doc, operation)

    def abandon(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        if self._doc is not None:
            self._doc.close()
            self._doc = None


class ImageExtractor:
    """Pulls embedded raster images out of a PDF as PNG records."""

    def __init__(self, resolve_timeout_seconds: float = 5.0) -> None:
        self._resolve_timeout_seconds = resolve_timeout_seconds

    def extract(self, pdf_bytes: bytes) -> list[ExtractedImage]:
        """Return every decodable embedded image, page-major, in paint order."""
        images: list[ExtractedImage] = []
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            Log.error(f"Image extraction could not open document: {exc}")
            return images

        worker = _ResolverWorker(pdf_bytes)
        try:
            Log.debug(f"Extracting images from {doc.page_count} pages")
            for page_index in range(doc.page_count):
                page_number = page_index + 1
                try:
                    page = doc.load_page(page_index)
                    operations = self.paint_operations(page)
                except Exception as exc:
                    Log.warning(f"Could not process page {page_number}: {exc}")
                    continue

                for operation in operations:
                    try:
                        image = self._extract_one(
                            worker, operation, page_number, position_index=len(images)
                        )
                    except FutureTimeoutError:
                        Log.warning(
                            f"Timed out resolving {operation.label} on page {page_number} "
                            f"after {self._resolve_timeout_seconds}s"
                        )
                        worker.abandon()
                        worker = _ResolverWorker(pdf_bytes)
                        continue
                    if image is not None:
                        images.append(image)
        except Exception as exc:
            Log.error(f"Image extraction stopped early: {exc}")
        finally:
            worker.close()
            doc.close()

        if images:
            Log.info(f"Extracted {len(images)} embedded images")
        else:
            Log.debug("No embedded raster images found in PDF")
        return images

    def paint_operations(self, page: pymupdf.Page) -> list[PaintOperation]:
        """List the image paints of *page* in content-stream order."""
        infos = page.get_image_info(xrefs=True) or []
        inline_blocks: list[dict[str, object]] | None = None
        operations: list[PaintOperation] = []
        for info in infos:
            xref = int(info.get("xref") or 0)
            bbox = tuple(info.get("bbox") or (0.0, 0.0, 0.0, 0.0))
            if xref:
                operations.append(PaintOperation(xref=xref, bbox=bbox))
                continue
            if inline_blocks is None:
                inline_blocks = self._image_blocks(page)
            operations.append(
                PaintOperation(xref=0, bbox=bbox, inline_data=_take_block(inline_blocks, bbox))
            )
        return operations

    def _extract_one(
        self,
        worker: _ResolverWorker,
        operation: PaintOperation,
        page_number: int,
        position_index: int,
    ) -> ExtractedImage | None:
        """Resolve and encode one paint.

        Raises:
            concurrent.futures.TimeoutError: if resolution overran the timeout;
                the caller abandons the worker.
        """
        future = worker.submit(self.resolve, operation)
        try:
            raw = future.result(timeout=self._resolve_timeout_seconds)
        except FutureTimeoutError:
            raise
        except Exception as exc:
            Log.warning(f"Could not extract {operation.label} from page {page_number}: {exc}")
            return None

        if raw is None:
            Log.debug(f"Skipping {operation.label} on page {page_number}: no pixel data")
            return None

        try:
            png = encode_png(
                to_rgba(raw.samples, raw.kind, raw.width, raw.height), raw.width, raw.height
            )
        except Exception as exc:
            Log.warning(f"Could not encode {operation.label} from page {page_number}: {exc}")
            return None

        Log.debug(
            f"Extracted image {position_index + 1} from page {page_number} "
            f"({raw.width}x{raw.height}, {raw.kind.name})"
        )
        return ExtractedImage(
            data=base64.b64encode(png).decode("ascii"),
            alt_text=f"Image {position_index + 1} from page {page_number}",
            page_number=page_number,
            position_index=position_index,
            mime_type="image/png",
            width=raw.width,
            height=raw.height,
        )

    @staticmethod
    def resolve(doc: pymupdf.Document, operation: PaintOperation) -> RawImage | None:
        """Decode the painted image; None when it has no usable pixels."""
        if operation.xref:
            pixmap = pymupdf.Pixmap(doc, operation.xref)
        elif operation.inline_data:
            pixmap = pymupdf.Pixmap(operation.inline_data)
        else:
            return None

        if pixmap.colorspace is None:
            return None
        kind = classify_pixmap(pixmap)
        if kind is None:
            pixmap = pymupdf.Pixmap(pymupdf.csRGB, pixmap)
            kind = classify_pixmap(pixmap)
            if kind is None:
                return None

        width, height = pixmap.width, pixmap.height
        samples = pixmap.samples
        if not width or not height or not samples:
            return None
        return RawImage(width=width, height=height, kind=kind, samples=bytes(samples))

    @staticmethod
    def _image_blocks(page: pymupdf.Page) -> list[dict[str, object]]:
        content = page.get_text("dict", flags=pymupdf.TEXT_PRESERVE_IMAGES)
        return [block for block in content.get("blocks", []) if block.get("type") == 1]


def _take_block(
    blocks: list[dict[str, object]], bbox: tuple[float, ...]
) -> bytes | None:
    """Pop the first image block whose bbox matches *bbox*."""
    for index, block in enumerate(blocks):
        block_bbox = tuple(block.get("bbox") or ())
        if len(block_bbox) == 4 and all(
            abs(a - b) <= _BBOX_TOLERANCE for a, b in zip(block_bbox, bbox)
        ):
            data = blocks.pop(index).get("image")
            return data if isinstance(data, bytes) else None
    return None
