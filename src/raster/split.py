from __future__ import annotations

import math
from typing import Iterable

from contracts.errors import UnsupportedLayout
from contracts.raster import RasterPage, TextRun


def validate_cut_ratio(cut_ratio: float) -> float:
    if not (0.0 < cut_ratio < 1.0):
        raise ValueError(f"cut_ratio must be within (0, 1), got {cut_ratio!r}")
    return float(cut_ratio)


def cut_row(height: int, cut_ratio: float) -> int:
    """
    Pixel row where the page is cut: the TOP half is rows [0, cut) and the
    BOTTOM half rows [cut, height). Text runs with baseline Y <= cut go TOP.
    """

    validate_cut_ratio(cut_ratio)
    return int(math.floor(height * cut_ratio))


def assign_runs(runs: Iterable[TextRun], cut_y: float) -> tuple[list[TextRun], list[TextRun]]:
    """
    Partition runs by baseline Y (pixel space, Y down). The boundary belongs
    to TOP. BOTTOM runs are translated into the bottom crop's coordinates.
    """

    top: list[TextRun] = []
    bottom: list[TextRun] = []
    for run in runs:
        if run.baseline_y <= cut_y:
            top.append(run)
        else:
            bottom.append(
                TextRun(text=run.text, baseline_x=run.baseline_x, baseline_y=run.baseline_y - cut_y)
            )
    return top, bottom


def split_halves(page: RasterPage, cut_ratio: float = 0.5) -> tuple[RasterPage, RasterPage]:
    """
    Crop a rendered page into TOP and BOTTOM halves (no resampling) and
    distribute its text runs between them.

    `top.pixel_height + bottom.pixel_height == page.pixel_height` always holds.
    """

    cut = cut_row(page.pixel_height, cut_ratio)
    if cut <= 0 or cut >= page.pixel_height:
        raise UnsupportedLayout(
            "Page is too small to split into two halves",
            detail={"pixel_height": page.pixel_height, "cut_ratio": cut_ratio},
        )

    width = page.pixel_width
    top_img = page.image.crop((0, 0, width, cut))
    bottom_img = page.image.crop((0, cut, width, page.pixel_height))
    top_runs, bottom_runs = assign_runs(page.text_runs, cut)

    top = RasterPage(
        pixel_width=width,
        pixel_height=cut,
        image=top_img,
        text_runs=tuple(top_runs),
        page_index=page.page_index,
    )
    bottom = RasterPage(
        pixel_width=width,
        pixel_height=page.pixel_height - cut,
        image=bottom_img,
        text_runs=tuple(bottom_runs),
        page_index=page.page_index,
    )
    return top, bottom
