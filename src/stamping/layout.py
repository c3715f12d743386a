from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from contracts.errors import UnsupportedLayout
from pdf_overlay.text import text_width, with_ellipsis, wrap_text

from .contracts import RGB, InfoLine, LayoutMode, StampConfig


@dataclass(frozen=True, slots=True)
class TextItem:
    x: float
    y: float  # baseline, PDF space (Y up)
    text: str
    font: str
    size: float
    color: RGB


@dataclass(frozen=True, slots=True)
class StampLayout:
    mode: LayoutMode
    box_x: float
    box_y: float
    box_width: float
    box_height: float
    items: tuple[TextItem, ...]
    truncated: bool = False


@dataclass(slots=True)
class _Line:
    text: str
    font: str
    size: float
    color: RGB
    centered: bool = False


@dataclass(slots=True)
class _Source:
    text: str
    font: str
    size: float
    color: RGB
    centered: bool = False


def _line_height(line: _Line, config: StampConfig) -> float:
    return line.size * config.line_spacing


def _sections_height(sections: list[list[_Line]], config: StampConfig) -> float:
    lines = sum(_line_height(ln, config) for s in sections for ln in s)
    gaps = config.section_gap * max(0, len(sections) - 1)
    return lines + gaps


def _natural_width(sources: list[_Source]) -> float:
    widest = 0.0
    for s in sources:
        for paragraph in s.text.split("\n"):
            widest = max(widest, text_width(paragraph.strip(), s.font, s.size))
    return widest


def _sources(lines: Sequence[InfoLine], mode: LayoutMode, config: StampConfig) -> list[list[_Source]]:
    sections: list[list[_Source]] = []
    for info in lines:
        if mode is LayoutMode.CENTERED_BLOCK:
            text = info.value if info.label is None else f"{info.label}: {info.value}"
            sections.append([_Source(text, config.font, config.font_size, config.text_color, True)])
            continue

        section: list[_Source] = []
        if info.label is not None:
            section.append(_Source(info.label.upper(), config.bold_font, config.label_font_size, config.card_label_color))
        section.append(_Source(info.value, config.font, config.font_size, config.card_text_color))
        sections.append(section)
    return sections


def _wrap(sources: list[_Source], width: float) -> list[_Line]:
    out: list[_Line] = []
    for s in sources:
        out.extend(_Line(t, s.font, s.size, s.color, s.centered) for t in wrap_text(s.text, s.font, s.size, width))
    return out


def _truncate(sections: list[list[_Line]], budget: float, width: float, config: StampConfig) -> list[list[_Line]]:
    """
    Drop wrapped lines from the end of the last section (then the section
    itself, then the one before) until the content fits `budget`, and mark the
    last kept line with an ellipsis.
    """

    sections = [list(s) for s in sections]
    while sections and _sections_height(sections, config) > budget:
        sections[-1].pop()
        if not sections[-1]:
            sections.pop()

    if not sections:
        raise UnsupportedLayout("Page is too small to hold any stamp content")

    last = sections[-1][-1]
    last.text = with_ellipsis(last.text, last.font, last.size, width)
    return sections


def layout_stamp(
    page_width: float,
    page_height: float,
    information_lines: Sequence[InfoLine],
    mode: LayoutMode,
    config: StampConfig,
) -> StampLayout:
    """
    Pure placement of the information block on a page of the given size.

    The block is as wide as its longest unwrapped line (capped by
    `max_width` and the page margins) and centered on the page.
    """

    outer_max = min(config.max_width, page_width - 2 * config.page_margin)
    avail_w = outer_max - 2 * config.padding
    avail_h = page_height - 2 * config.page_margin - 2 * config.padding
    if avail_w <= 0 or avail_h <= 0:
        raise UnsupportedLayout(
            "Page is too small for the stamp block", detail={"width": page_width, "height": page_height}
        )

    title_sources: list[_Source] = []
    if mode is LayoutMode.BORDERED_CARD and config.title:
        title_sources.append(
            _Source(config.title, config.bold_font, config.title_font_size, config.card_title_color, True)
        )
    content_sources = _sources(information_lines, mode, config)

    all_sources = title_sources + [s for sec in content_sources for s in sec]
    if not all_sources:
        raise ValueError("Nothing to stamp: no information lines and no title")

    inner_w = min(avail_w, _natural_width(all_sources)) or avail_w

    title = _wrap(title_sources, inner_w)
    sections = [_wrap(sec, inner_w) for sec in content_sources]

    title_h = sum(_line_height(ln, config) for ln in title)
    if title and sections:
        title_h += config.title_gap
    if title_h > avail_h:
        raise UnsupportedLayout("Page is too small for the stamp title")

    truncated = False
    if title_h + _sections_height(sections, config) > avail_h:
        sections = _truncate(sections, avail_h - title_h, inner_w, config)
        truncated = True

    content_h = title_h + _sections_height(sections, config)
    box_w = inner_w + 2 * config.padding
    box_h = content_h + 2 * config.padding
    box_x = (page_width - box_w) / 2
    box_y = (page_height - box_h) / 2

    items: list[TextItem] = []
    cursor = box_y + box_h - config.padding

    def place(line: _Line) -> None:
        nonlocal cursor
        if line.centered:
            x = box_x + (box_w - text_width(line.text, line.font, line.size)) / 2
        else:
            x = box_x + config.padding
        items.append(TextItem(x, cursor - line.size, line.text, line.font, line.size, line.color))
        cursor -= _line_height(line, config)

    for line in title:
        place(line)
    if title and sections:
        cursor -= config.title_gap
    for i, section in enumerate(sections):
        if i:
            cursor -= config.section_gap
        for line in section:
            place(line)

    return StampLayout(
        mode=mode,
        box_x=box_x,
        box_y=box_y,
        box_width=box_w,
        box_height=box_h,
        items=tuple(items),
        truncated=truncated,
    )
