"""
Shared contracts for the order-document PDF pipeline.

These types are the boundary between stages (raster -> split -> extraction ->
packaging -> batch import). Stage code should exchange these objects, not
ad-hoc dicts.
"""

from .errors import (
    InvalidDocument,
    NoFieldsSelected,
    NoRecordsIncluded,
    OrdemPdfError,
    PageIndexOutOfRange,
    StorageError,
    TemplateUnavailable,
    UnsupportedLayout,
)
from .fields import ExtractedFields, FieldId
from .placeholders import DEFAULT_PLACEHOLDER, WILDCARD, Placeholders
from .raster import Half, RasterPage, TextRun

__all__ = [
    "DEFAULT_PLACEHOLDER",
    "ExtractedFields",
    "FieldId",
    "Half",
    "InvalidDocument",
    "NoFieldsSelected",
    "NoRecordsIncluded",
    "OrdemPdfError",
    "PageIndexOutOfRange",
    "Placeholders",
    "RasterPage",
    "StorageError",
    "TemplateUnavailable",
    "TextRun",
    "UnsupportedLayout",
    "WILDCARD",
]
