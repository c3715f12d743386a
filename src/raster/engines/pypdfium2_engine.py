from __future__ import annotations

import re

from contracts.errors import InvalidDocument, PageIndexOutOfRange
from contracts.raster import RasterPage, TextRun

from .base import PdfRasterEngine, RasterDocument

_WS = re.compile(r"\s+")


class Pypdfium2Engine(PdfRasterEngine):
    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        try:
            import pypdfium2 as pdfium  # type: ignore

            return getattr(pdfium, "__version__", None)
        except Exception:
            return None

    def _require_pdfium(self):
        try:
            import pypdfium2 as pdfium  # type: ignore

            return pdfium
        except ImportError as e:
            raise RuntimeError("Missing dependency: pypdfium2 is required for rendering.") from e

    def _open(self, document_bytes: bytes):
        pdfium = self._require_pdfium()
        if not isinstance(document_bytes, (bytes, bytearray)) or not document_bytes:
            raise InvalidDocument("Document is empty or not bytes")
        try:
            return pdfium.PdfDocument(bytes(document_bytes))
        except Exception as e:
            raise InvalidDocument("Bytes do not parse as a PDF document", detail={"error": repr(e)}) from e

    def open_document(self, *, document_bytes: bytes) -> RasterDocument:
        return _PdfiumDocument(self._open(document_bytes))


class _PdfiumDocument(RasterDocument):
    def __init__(self, doc) -> None:
        self._doc = doc
        self._page_count = len(doc)

    @property
    def page_count(self) -> int:
        return self._page_count

    def close(self) -> None:
        if self._doc is not None:
            self._doc.close()
            self._doc = None

    def render_page(self, page_index: int, *, scale: float) -> RasterPage:
        if self._doc is None:
            raise ValueError("document is closed")
        if page_index < 0 or page_index >= self._page_count:
            raise PageIndexOutOfRange(
                f"Page index out of range: {page_index} (0..{self._page_count - 1})",
                detail={"page_index": page_index, "page_count": self._page_count},
            )
        return _render(self._doc, page_index=page_index, scale=scale)


def _render(doc, *, page_index: int, scale: float) -> RasterPage:
    page = doc[page_index]
    textpage = None
    try:
        left0, bottom0, right0, top0 = page.get_bbox()
        rotation = int(page.get_rotation())

        bitmap = page.render(scale=scale)
        image = bitmap.to_pil().convert("RGB")
        width_px, height_px = image.size

        textpage = page.get_textpage()
        runs: list[TextRun] = []
        for i in range(textpage.count_rects()):
            left, bottom, right, top = textpage.get_rect(i)
            text = _WS.sub(" ", textpage.get_text_bounded(left, bottom, right, top)).strip()
            if not text:
                continue
            # PDF user space is bottom-up; flip into top-down pixel space.
            runs.append(
                TextRun(
                    text=text,
                    baseline_x=(left - left0) * scale,
                    baseline_y=(top0 - bottom) * scale,
                )
            )

        return RasterPage(
            pixel_width=int(width_px),
            pixel_height=int(height_px),
            image=image,
            text_runs=tuple(runs),
            page_index=page_index,
            rotation=rotation,
        )
    finally:
        if textpage is not None:
            textpage.close()
        page.close()
