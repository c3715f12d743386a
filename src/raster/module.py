from __future__ import annotations

import logging

from contracts.raster import RasterPage

from .contracts import RasterConfig, RasterEngineName
from .engines import PdfRasterEngine, Pypdfium2Engine, RasterDocument

logger = logging.getLogger(__name__)


def _get_engine(engine: RasterEngineName) -> PdfRasterEngine:
    if engine == RasterEngineName.PYPDFIUM2:
        return Pypdfium2Engine()
    raise ValueError(f"Unsupported raster engine: {engine}")


def open_document(document_bytes: bytes, *, config: RasterConfig | None = None) -> RasterDocument:
    """
    Parse a document once for rendering several pages; use as a context
    manager. Raises `InvalidDocument` when the bytes are not a PDF.
    """

    config = config or RasterConfig()
    engine = _get_engine(config.engine)
    doc = engine.open_document(document_bytes=document_bytes)
    logger.debug(
        "opened %d-page document with %s %s", doc.page_count, engine.backend_id(), engine.backend_version() or ""
    )
    return doc


def render_page(
    document_bytes: bytes, page_index: int, scale: float | None = None, *, config: RasterConfig | None = None
) -> RasterPage:
    """
    Render one page (0-based `page_index`) and extract its positioned text runs.

    Raises `InvalidDocument` when the bytes are not a PDF and
    `PageIndexOutOfRange` when `page_index` is outside the document.
    """

    config = config or RasterConfig()
    if scale is None:
        scale = config.scale
    elif scale <= 0:
        raise ValueError("scale must be > 0")
    with open_document(document_bytes, config=config) as doc:
        return doc.render_page(page_index, scale=scale)


def page_count(document_bytes: bytes, *, config: RasterConfig | None = None) -> int:
    config = config or RasterConfig()
    return _get_engine(config.engine).get_page_count(document_bytes=document_bytes)
