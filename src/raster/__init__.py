"""
Raster stage: PDF page -> pixel buffer + positioned embedded text runs,
and the half-page splitter that cuts one rendered page into two orders.

Text comes from the document's own text layer; this stage performs no OCR.
"""

from .contracts import DEFAULT_CUT_RATIO, DEFAULT_SCALE, RasterConfig, RasterEngineName
from .engines import RasterDocument
from .module import open_document, page_count, render_page
from .split import assign_runs, cut_row, split_halves, validate_cut_ratio

__all__ = [
    "DEFAULT_CUT_RATIO",
    "DEFAULT_SCALE",
    "RasterConfig",
    "RasterDocument",
    "RasterEngineName",
    "assign_runs",
    "cut_row",
    "open_document",
    "page_count",
    "render_page",
    "split_halves",
    "validate_cut_ratio",
]
