from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from reportlab.pdfgen import canvas

from contracts.placeholders import Placeholders
from pdf_overlay.merge import compose_over_background, page_size, read_pdf, render_overlay
from pdf_overlay.text import text_width

from .contracts import Alignment, FieldDefinition, ReportConfig
from .layout import GroupBand, PageLayout, ReportLayout, RowBand, layout_report

logger = logging.getLogger(__name__)


def _aligned_x(x: float, width: float, text_w: float, alignment: Alignment, pad: float) -> float:
    if alignment is Alignment.CENTER:
        return x + max(pad, (width - text_w) / 2)
    if alignment is Alignment.RIGHT:
        return x + max(pad, width - pad - text_w)
    return x + pad


def _line(c: canvas.Canvas, x1: float, y1: float, x2: float, y2: float, width: float) -> None:
    c.setLineWidth(width)
    c.line(x1, y1, x2, y2)


def _draw_titles(c: canvas.Canvas, layout: ReportLayout, config: ReportConfig) -> None:
    c.setFillColorRGB(*config.text_color)
    top = layout.page_height - config.margin_top

    c.setFont(config.bold_font, config.title_size)
    tw = text_width(layout.title, config.bold_font, config.title_size)
    c.drawString(layout.start_x + (layout.usable_width - tw) / 2, top, layout.title)

    c.setFont(config.font, config.subtitle_size)
    sw = text_width(layout.subtitle, config.font, config.subtitle_size)
    c.drawString(layout.start_x + (layout.usable_width - sw) / 2, top - config.subtitle_offset, layout.subtitle)


def _draw_header(c: canvas.Canvas, layout: ReportLayout, page: PageLayout, config: ReportConfig) -> None:
    x0 = layout.start_x
    base = page.header_top - config.header_height + 2

    c.setFillColorRGB(*config.header_background)
    c.rect(x0, base, layout.table_width, config.header_height, stroke=0, fill=1)

    c.setFont(config.bold_font, config.header_size)
    c.setStrokeColorRGB(*config.grid_color)
    x = x0
    for f, w in zip(layout.fields, layout.column_widths):
        label = f.label.upper()
        tw = text_width(label, config.bold_font, config.header_size)
        c.setFillColorRGB(*config.text_color)
        c.drawString(_aligned_x(x, w, tw, f.alignment, config.cell_pad_x), page.header_top - config.header_height + 5, label)
        _line(c, x, base, x, base - 6, 0.5)
        x += w
    _line(c, x0, base, x0 + layout.table_width, base, 0.8)


def _draw_group(c: canvas.Canvas, layout: ReportLayout, band: GroupBand, config: ReportConfig) -> None:
    x0 = layout.start_x
    base = band.top - config.group_header_height + 2

    c.setFillColorRGB(*config.group_background)
    c.rect(x0, base, layout.table_width, config.group_header_height, stroke=0, fill=1)

    c.setFillColorRGB(*config.text_color)
    c.setFont(config.bold_font, config.group_size)
    tw = text_width(band.label, config.bold_font, config.group_size)
    c.drawString(x0 + max(config.cell_pad_x, (layout.table_width - tw) / 2), band.top - config.group_header_height + 5, band.label)

    c.setStrokeColorRGB(*config.grid_color)
    _line(c, x0, base, x0 + layout.table_width, base, 0.8)


def _draw_row(c: canvas.Canvas, layout: ReportLayout, band: RowBand, config: ReportConfig) -> None:
    x0 = layout.start_x
    bottom = band.top - band.height

    c.setStrokeColorRGB(*config.grid_color)
    _line(c, x0, band.top, x0 + layout.table_width, band.top, 0.5)

    c.setFont(config.font, config.body_size)
    for cell in band.cells:
        c.setStrokeColorRGB(*config.grid_color)
        _line(c, cell.x, band.top, cell.x, bottom, 0.5)

        c.setFillColorRGB(*config.text_color)
        y = band.top - config.cell_pad_y - config.row_line_height
        for text in cell.lines:
            tw = text_width(text, config.font, config.body_size)
            c.drawString(_aligned_x(cell.x, cell.width, tw, cell.alignment, config.cell_pad_x), y, text)
            y -= config.row_line_height

    c.setStrokeColorRGB(*config.grid_color)
    _line(c, x0 + layout.table_width, band.top, x0 + layout.table_width, bottom, 0.5)


def _draw_pager(c: canvas.Canvas, layout: ReportLayout, page: PageLayout, config: ReportConfig) -> None:
    text = f"{page.index + 1} de {layout.page_count}"
    tw = text_width(text, config.font, config.pager_size)
    c.setFillColorRGB(*config.text_color)
    c.setFont(config.font, config.pager_size)
    c.drawString(layout.page_width - layout.start_x - config.cell_pad_x - tw, config.min_y + 6, text)


def draw_report(c: canvas.Canvas, layout: ReportLayout, config: ReportConfig) -> None:
    """One canvas page per layout page; the caller saves the canvas."""
    for page in layout.pages:
        _draw_titles(c, layout, config)
        _draw_header(c, layout, page, config)
        for band in page.bands:
            if isinstance(band, GroupBand):
                _draw_group(c, layout, band, config)
            else:
                _draw_row(c, layout, band, config)
        c.setStrokeColorRGB(*config.grid_color)
        _line(c, layout.start_x, page.bottom, layout.start_x + layout.table_width, page.bottom, 0.8)
        _draw_pager(c, layout, page, config)
        c.showPage()


def compose_report(
    template_bytes: bytes,
    fields: Sequence[FieldDefinition],
    rows: Sequence[Mapping[str, Any]],
    date_range_label: str,
    *,
    config: ReportConfig | None = None,
    placeholders: Placeholders | None = None,
) -> bytes:
    """
    Draw the report grid over copies of the letterhead's first page.

    Raises `NoFieldsSelected` for an empty field list and `InvalidDocument`
    when the template bytes are not a readable PDF.
    """

    config = config or ReportConfig()
    template = read_pdf(template_bytes)
    width, height = page_size(template.pages[0])

    layout = layout_report(width, height, fields, rows, date_range_label, config=config, placeholders=placeholders)
    logger.info("report: %d rows, %d fields, %d pages", len(rows), len(layout.fields), layout.page_count)

    overlay = render_overlay(width, height, lambda c: draw_report(c, layout, config))
    return compose_over_background(template_bytes, list(overlay.pages))
