from __future__ import annotations

from typing import Any


class OrdemPdfError(Exception):
    """
    Base class for every failure raised by the PDF pipeline.

    `code` is a stable identifier suitable for logs and for the batch import
    ledger; `detail` carries JSON-ready context.
    """

    code = "ORDEM_PDF_ERROR"

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or {}


class InvalidDocument(OrdemPdfError):
    code = "INVALID_DOCUMENT"


class PageIndexOutOfRange(OrdemPdfError):
    code = "PAGE_INDEX_OUT_OF_RANGE"


class UnsupportedLayout(OrdemPdfError):
    """Page geometry the two-orders-per-page split cannot handle (e.g. rotated scans)."""

    code = "UNSUPPORTED_LAYOUT"


class TemplateUnavailable(OrdemPdfError):
    code = "TEMPLATE_UNAVAILABLE"


class NoFieldsSelected(OrdemPdfError):
    code = "NO_FIELDS_SELECTED"


class NoRecordsIncluded(OrdemPdfError):
    code = "NO_RECORDS_INCLUDED"


class StorageError(OrdemPdfError):
    code = "STORAGE_ERROR"
