"""
Shared drawing helpers: reportlab overlays merged onto existing PDF pages with
pdfrw, plus font-metric text wrapping.
"""

from .merge import compose_over_background, new_canvas, overlay_first_page, page_size, read_pdf, render_overlay
from .text import ELLIPSIS, shade, split_long_word, text_width, with_ellipsis, wrap_text

__all__ = [
    "ELLIPSIS",
    "compose_over_background",
    "new_canvas",
    "overlay_first_page",
    "page_size",
    "read_pdf",
    "render_overlay",
    "shade",
    "split_long_word",
    "text_width",
    "with_ellipsis",
    "wrap_text",
]
