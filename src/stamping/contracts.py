from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

RGB = tuple[float, float, float]


class LayoutMode(str, Enum):
    CENTERED_BLOCK = "centered_block"
    BORDERED_CARD = "bordered_card"


@dataclass(frozen=True, slots=True)
class InfoLine:
    """One stamped line; `label` is None for free text printed as is."""

    label: str | None
    value: str

    @classmethod
    def coerce(cls, obj: Any) -> "InfoLine":
        if isinstance(obj, InfoLine):
            return obj
        if isinstance(obj, str):
            return cls(label=None, value=obj)
        if isinstance(obj, dict):
            label = obj.get("label")
            return cls(label=None if label is None else str(label), value=str(obj["value"]))
        if isinstance(obj, (tuple, list)) and len(obj) == 2:
            label, value = obj
            return cls(label=None if label is None else str(label), value=str(value))
        raise TypeError(f"expected a string, a (label, value) pair or a mapping, got {obj!r}")


@dataclass(frozen=True, slots=True)
class StampRequest:
    document_bytes: bytes
    information_lines: tuple[InfoLine, ...]
    layout_mode: LayoutMode = LayoutMode.BORDERED_CARD


@dataclass(frozen=True, slots=True)
class StampConfig:
    """
    Fonts are reportlab standard font names; sizes, margins and widths are in
    PDF points. `shadow_offset` is the shadow displacement (right and down)
    and `shadow_factor` how much darker the shadow is than its text.
    """

    font: str = "Helvetica"
    bold_font: str = "Helvetica-Bold"
    font_size: float = 11.0
    label_font_size: float = 8.5
    title_font_size: float = 12.0
    line_spacing: float = 1.3
    section_gap: float = 4.0
    title_gap: float = 6.0

    max_width: float = 360.0
    padding: float = 12.0
    page_margin: float = 24.0

    title: str = "INFORMAÇÕES DO SOLICITANTE"

    text_color: RGB = (0.06, 0.09, 0.16)
    block_background: RGB | None = None

    card_fill: RGB = (0.06, 0.09, 0.16)
    card_border: RGB = (0.2, 0.25, 0.33)
    card_text_color: RGB = (1.0, 1.0, 1.0)
    card_label_color: RGB = (0.8, 0.84, 0.88)
    card_title_color: RGB = (1.0, 1.0, 1.0)
    border_width: float = 1.0
    corner_radius: float = 6.0

    shadow_offset: float = 1.0
    shadow_factor: float = 0.45

    def __post_init__(self) -> None:
        for name in ("font_size", "label_font_size", "title_font_size", "line_spacing", "max_width"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0")
        for name in ("padding", "page_margin", "section_gap", "title_gap", "border_width", "corner_radius"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        if not (0.0 <= self.shadow_factor <= 1.0):
            raise ValueError("shadow_factor must be within [0, 1]")
