"""
Image-to-PDF packaging: a raster crop becomes a standalone single-page PDF.

The result is a faithful picture of the crop, not a re-typeset document.
"""

from .module import encode_png, package_as_single_page_pdf

__all__ = ["encode_png", "package_as_single_page_pdf"]
