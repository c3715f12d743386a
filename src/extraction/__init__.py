"""
Identifier extraction: labeled numeric fields (connection, order and
registration numbers) from one half-page's embedded text.

The label heuristics are a declarative table (`patterns.FIELD_PATTERNS`).
"""

from .contracts import ExtractionConfig
from .module import extract_fields, extract_fields_from_text, group_lines, only_digits, runs_to_text
from .patterns import DIGIT_RUN, FIELD_PATTERNS, FieldPattern

__all__ = [
    "DIGIT_RUN",
    "ExtractionConfig",
    "FIELD_PATTERNS",
    "FieldPattern",
    "extract_fields",
    "extract_fields_from_text",
    "group_lines",
    "only_digits",
    "runs_to_text",
]
