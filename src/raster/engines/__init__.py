"""
Rendering engines for the raster stage.

The public API lives in `raster.*`; engines are kept separate so a different
backend can be swapped in behind `PdfRasterEngine`.
"""

from .base import PdfRasterEngine, RasterDocument
from .pypdfium2_engine import Pypdfium2Engine

__all__ = ["PdfRasterEngine", "Pypdfium2Engine", "RasterDocument"]
