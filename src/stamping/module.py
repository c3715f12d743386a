from __future__ import annotations

import logging
from typing import Any, Iterable

from reportlab.pdfgen import canvas

from pdf_overlay.merge import overlay_first_page
from pdf_overlay.text import shade
from storage.backends.base import PDF_CONTENT_TYPE, BlobStore

from .contracts import InfoLine, LayoutMode, StampConfig, StampRequest
from .layout import StampLayout, layout_stamp

logger = logging.getLogger(__name__)


def _draw(c: canvas.Canvas, layout: StampLayout, config: StampConfig) -> None:
    if layout.mode is LayoutMode.BORDERED_CARD:
        c.setFillColorRGB(*config.card_fill)
        c.setStrokeColorRGB(*config.card_border)
        c.setLineWidth(config.border_width)
        c.roundRect(
            layout.box_x, layout.box_y, layout.box_width, layout.box_height, config.corner_radius, stroke=1, fill=1
        )
    elif config.block_background is not None:
        c.setFillColorRGB(*config.block_background)
        c.rect(layout.box_x, layout.box_y, layout.box_width, layout.box_height, stroke=0, fill=1)

    off = config.shadow_offset
    for item in layout.items:
        c.setFont(item.font, item.size)
        # Shadow first so the text sits on top of it.
        c.setFillColorRGB(*shade(item.color, config.shadow_factor))
        c.drawString(item.x + off, item.y - off, item.text)
        c.setFillColorRGB(*item.color)
        c.drawString(item.x, item.y, item.text)


def stamp(
    document_bytes: bytes,
    information_lines: Iterable[InfoLine | str | tuple[str, str]],
    layout_mode: LayoutMode | str = LayoutMode.BORDERED_CARD,
    *,
    config: StampConfig | None = None,
) -> bytes:
    """
    Overlay the information block on the document's first page.

    Output is byte-identical for identical inputs. Raises `InvalidDocument`
    when the bytes are not a readable PDF.
    """

    config = config or StampConfig()
    mode = LayoutMode(layout_mode)
    lines = [InfoLine.coerce(x) for x in information_lines]

    def draw(c: canvas.Canvas, width: float, height: float) -> None:
        layout = layout_stamp(width, height, lines, mode, config)
        if layout.truncated:
            logger.warning("stamp block truncated to fit a %.0fx%.0f page", width, height)
        _draw(c, layout, config)

    return overlay_first_page(document_bytes, draw)


def stamp_request(request: StampRequest, *, config: StampConfig | None = None) -> bytes:
    return stamp(request.document_bytes, request.information_lines, request.layout_mode, config=config)


def stamp_stored_order(
    store: BlobStore,
    path: str,
    information_lines: Iterable[Any],
    layout_mode: LayoutMode | str = LayoutMode.BORDERED_CARD,
    *,
    config: StampConfig | None = None,
    out_path: str | None = None,
) -> bytes:
    """
    Download a stored order document and stamp it. When `out_path` is given,
    the stamped copy is also uploaded there (the source is never overwritten
    unless `out_path == path`).
    """

    source = store.download(path)
    logger.info("stamping %s (%d bytes) from %s", path, len(source), store.backend_id)
    stamped = stamp(source, information_lines, layout_mode, config=config)
    if out_path is not None:
        store.upload(out_path, stamped, PDF_CONTENT_TYPE)
    return stamped
