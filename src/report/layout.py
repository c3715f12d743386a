from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

from contracts.errors import NoFieldsSelected, UnsupportedLayout
from contracts.placeholders import Placeholders
from pdf_overlay.text import wrap_text

from .contracts import Alignment, FieldDefinition, ReportConfig
from .formatting import canonical_status, format_cell

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CellBox:
    x: float
    width: float
    lines: tuple[str, ...]
    alignment: Alignment


@dataclass(frozen=True, slots=True)
class RowBand:
    top: float
    height: float
    cells: tuple[CellBox, ...]


@dataclass(frozen=True, slots=True)
class GroupBand:
    top: float
    label: str


Band = Union[RowBand, GroupBand]


@dataclass(slots=True)
class PageLayout:
    index: int
    header_top: float
    bands: list[Band] = field(default_factory=list)
    bottom: float = 0.0

    @property
    def rows(self) -> list[RowBand]:
        return [b for b in self.bands if isinstance(b, RowBand)]


@dataclass(frozen=True, slots=True)
class ReportLayout:
    page_width: float
    page_height: float
    start_x: float
    usable_width: float
    column_widths: tuple[int, ...]
    fields: tuple[FieldDefinition, ...]
    title: str
    subtitle: str
    pages: tuple[PageLayout, ...]

    @property
    def table_width(self) -> int:
        return sum(self.column_widths)

    @property
    def page_count(self) -> int:
        return len(self.pages)


def column_widths(nominal_widths: Sequence[float], usable_width: float) -> list[int]:
    """
    Scale every column by the same factor `min(1, usable / sum(nominal))`,
    floored to whole points, so the grid never overflows the usable width.
    """

    total = sum(nominal_widths)
    scale = min(1.0, usable_width / total) if total > 0 else 1.0
    return [max(0, math.floor(w * scale)) for w in nominal_widths]


def group_rows(
    rows: Sequence[Mapping[str, Any]], config: ReportConfig
) -> list[tuple[str | None, list[Mapping[str, Any]]]]:
    """
    (label, rows) sections. Without status grouping there is one unlabeled
    section; with it, configured statuses come first in their configured
    order and any other status follows in first-seen order.
    """

    if not config.group_by_status:
        return [(None, list(rows))]

    buckets: dict[str, list[Mapping[str, Any]]] = {}
    for row in rows:
        buckets.setdefault(canonical_status(row.get(config.status_column)), []).append(row)

    sections: list[tuple[str | None, list[Mapping[str, Any]]]] = []
    known = set()
    for g in config.status_groups:
        known.add(g.key)
        if buckets.get(g.key):
            sections.append((f"STATUS: {g.label}", buckets[g.key]))
    for key, items in buckets.items():
        if key not in known:
            sections.append((f"STATUS: {key.upper() or 'SEM STATUS'}", items))
    return sections


def layout_report(
    page_width: float,
    page_height: float,
    fields: Sequence[FieldDefinition],
    rows: Sequence[Mapping[str, Any]],
    date_range_label: str,
    *,
    config: ReportConfig | None = None,
    placeholders: Placeholders | None = None,
) -> ReportLayout:
    """
    Pure pagination pass. Y values are PDF points from the bottom of the page;
    `top` of a band is its upper edge.

    Rows are atomic: a row that does not fit above the footer starts a new
    page (which repeats title, subtitle and header). A row taller than an empty
    page is placed anyway rather than split.
    """

    config = config or ReportConfig()
    fields = tuple(fields)
    if not fields:
        raise NoFieldsSelected("Select at least one field for the report")

    start_x = config.margin_x + config.gutter_x
    usable = page_width - 2 * start_x
    if usable <= 0:
        raise UnsupportedLayout("Template page is too narrow for the report grid", detail={"width": page_width})

    widths = column_widths([f.nominal_width for f in fields], usable)
    first_top = page_height - config.margin_top - config.title_block
    min_y = config.min_y
    line_h = config.row_line_height

    pages: list[PageLayout] = []
    cursor = 0.0

    def new_page() -> PageLayout:
        nonlocal cursor
        if pages:
            pages[-1].bottom = cursor
        page = PageLayout(index=len(pages), header_top=first_top)
        pages.append(page)
        cursor = first_top - config.header_height - 4
        return page

    def add_group(page: PageLayout, label: str) -> None:
        nonlocal cursor
        page.bands.append(GroupBand(top=cursor, label=label))
        cursor -= config.group_header_height + 6

    def group_fits() -> bool:
        return cursor - (config.group_header_height + 8) >= min_y

    def measure(row: Mapping[str, Any]) -> tuple[tuple[CellBox, ...], float]:
        cells: list[CellBox] = []
        x = start_x
        for f, w in zip(fields, widths):
            text = format_cell(row, f, config, placeholders)
            wrap_w = max(config.min_wrap_width, w - 2 * config.cell_pad_x)
            cells.append(CellBox(x, w, tuple(wrap_text(text, config.font, config.body_size, wrap_w)), f.alignment))
            x += w
        n_lines = max(len(c.lines) for c in cells)
        return tuple(cells), max(n_lines, 1) * line_h + 2 * config.cell_pad_y

    page = new_page()
    for label, items in group_rows(rows, config):
        measured = [measure(row) for row in items]
        if label is not None:
            # A group header never ends a page: it moves down with its first row.
            first_h = measured[0][1] if measured else 0.0
            if page.bands and cursor - (config.group_header_height + 6) - first_h < min_y:
                page = new_page()
            add_group(page, label)

        for cells, height in measured:
            if cursor - height < min_y and page.rows:
                page = new_page()
                if label is not None and group_fits():
                    add_group(page, label)
            if cursor - height < min_y:
                logger.warning("report row is taller than a page (%.0f pt); drawn past the footer", height)

            page.bands.append(RowBand(top=cursor, height=height, cells=cells))
            cursor -= height

    page.bottom = cursor

    return ReportLayout(
        page_width=page_width,
        page_height=page_height,
        start_x=start_x,
        usable_width=usable,
        column_widths=tuple(widths),
        fields=fields,
        title=config.title.upper(),
        subtitle=date_range_label.upper(),
        pages=tuple(pages),
    )
