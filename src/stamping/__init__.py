"""
Document stamper: a word-wrapped information block drawn over the first page
of a stored order PDF before printing.
"""

from contracts.placeholders import DEFAULT_PLACEHOLDER, Placeholders

from .contracts import InfoLine, LayoutMode, StampConfig, StampRequest
from .fields import (
    CANDIDATE_KEYS,
    StampSubject,
    build_information_lines,
    format_phone,
    resolve_subject,
)
from .layout import StampLayout, TextItem, layout_stamp
from .module import stamp, stamp_request, stamp_stored_order

__all__ = [
    "CANDIDATE_KEYS",
    "DEFAULT_PLACEHOLDER",
    "InfoLine",
    "LayoutMode",
    "Placeholders",
    "StampConfig",
    "StampLayout",
    "StampRequest",
    "StampSubject",
    "TextItem",
    "build_information_lines",
    "format_phone",
    "layout_stamp",
    "resolve_subject",
    "stamp",
    "stamp_request",
    "stamp_stored_order",
]
