from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RasterEngineName(str, Enum):
    """
    Rendering backend identifiers.
    """

    PYPDFIUM2 = "pypdfium2"


DEFAULT_SCALE = 2.0
DEFAULT_CUT_RATIO = 0.5


@dataclass(frozen=True, slots=True)
class RasterConfig:
    """
    Rendering configuration.

    `scale` multiplies the page's native point size into pixels. The pipeline
    never OCRs the pixels; the scale only fixes the coordinate space the
    embedded text runs are reported in.
    """

    engine: RasterEngineName = RasterEngineName.PYPDFIUM2
    scale: float = DEFAULT_SCALE

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError("scale must be > 0")
