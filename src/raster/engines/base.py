from __future__ import annotations

from abc import ABC, abstractmethod

from contracts.raster import RasterPage


class RasterDocument(ABC):
    """
    An opened document. Pages are rendered one at a time from the same parsed
    handle; `close()` may be called more than once.
    """

    @property
    @abstractmethod
    def page_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def render_page(self, page_index: int, *, scale: float) -> RasterPage:
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> "RasterDocument":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class PdfRasterEngine(ABC):
    """
    Rendering engine abstraction.

    Engines must:
    - Render PDF pages to RGB raster images without resampling afterwards
    - Report embedded text runs in pixel space (origin top-left, Y down)
    - Raise `InvalidDocument` for unparseable bytes and
      `PageIndexOutOfRange` for a page index outside the document
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def open_document(self, *, document_bytes: bytes) -> RasterDocument:
        raise NotImplementedError

    def get_page_count(self, *, document_bytes: bytes) -> int:
        with self.open_document(document_bytes=document_bytes) as doc:
            return doc.page_count
