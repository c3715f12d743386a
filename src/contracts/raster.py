from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from PIL import Image


class Half(str, Enum):
    TOP = "TOP"
    BOTTOM = "BOTTOM"

    @property
    def tag(self) -> str:
        return "T" if self is Half.TOP else "B"


@dataclass(frozen=True, slots=True)
class TextRun:
    """
    One positioned run of embedded text.

    Coordinates are pixels in the raster's space: (0, 0) is the top-left corner
    and Y grows downward. `baseline_y` is the bottom edge of the run's box.
    """

    text: str
    baseline_x: float
    baseline_y: float


@dataclass(frozen=True, slots=True)
class RasterPage:
    """
    A rendered page (or a crop of one).

    `image` is an RGB Pillow image whose size is (pixel_width, pixel_height).
    `rotation` is the page's /Rotate value in degrees (0 for crops).
    """

    pixel_width: int
    pixel_height: int
    image: Image.Image
    text_runs: tuple[TextRun, ...]
    page_index: int = 0
    rotation: int = 0

    def __post_init__(self) -> None:
        if self.image.size != (self.pixel_width, self.pixel_height):
            raise ValueError(
                f"image size {self.image.size} does not match "
                f"({self.pixel_width}, {self.pixel_height})"
            )
