"""
Tabular report composer: selected order fields drawn as a paginated grid over
a letterhead template.
"""

from .catalog import (
    CUT_FIELDS,
    RECONNECTION_FIELDS,
    WIDTH_TOKENS,
    config_for,
    date_range_label,
    fields_for,
    suggest_report_filename,
    width_for_token,
)
from .contracts import Alignment, FieldDefinition, FieldKind, ReportBase, ReportConfig, StatusGroup
from .formatting import canonical_status, format_cell, format_datetime
from .layout import CellBox, GroupBand, PageLayout, ReportLayout, RowBand, column_widths, group_rows, layout_report
from .module import compose_report, draw_report
from .selection import ReportFieldSelection
from .template import load_template

__all__ = [
    "Alignment",
    "CUT_FIELDS",
    "CellBox",
    "FieldDefinition",
    "FieldKind",
    "GroupBand",
    "PageLayout",
    "RECONNECTION_FIELDS",
    "ReportBase",
    "ReportConfig",
    "ReportFieldSelection",
    "ReportLayout",
    "RowBand",
    "StatusGroup",
    "WIDTH_TOKENS",
    "canonical_status",
    "column_widths",
    "compose_report",
    "config_for",
    "date_range_label",
    "draw_report",
    "fields_for",
    "format_cell",
    "format_datetime",
    "group_rows",
    "layout_report",
    "load_template",
    "suggest_report_filename",
    "width_for_token",
]
