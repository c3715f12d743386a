from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

RGB = tuple[float, float, float]


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class FieldKind(str, Enum):
    TEXT = "text"
    DATETIME = "datetime"


class ReportBase(str, Enum):
    CUT = "corte"
    RECONNECTION = "religacao"


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    id: str
    label: str
    source_column: str
    alignment: Alignment = Alignment.LEFT
    nominal_width: float = 120.0
    kind: FieldKind = FieldKind.TEXT

    def __post_init__(self) -> None:
        if self.nominal_width < 0:
            raise ValueError("nominal_width must be >= 0")


@dataclass(frozen=True, slots=True)
class StatusGroup:
    """`key` is the canonical status (lower case, no accents, spaces for underscores)."""

    key: str
    label: str


@dataclass(frozen=True, slots=True)
class ReportConfig:
    """
    Page geometry in PDF points (origin bottom-left) and typography for the
    report grid. `status_groups` orders the optional per-status sections;
    rows with a status outside it follow in first-seen order.
    """

    title: str = "RELATÓRIO DE CORTES"

    margin_x: float = 36.0
    gutter_x: float = 10.0
    margin_top: float = 160.0
    margin_bottom: float = 32.0
    footer_reserve: float = 56.0
    title_block: float = 40.0
    subtitle_offset: float = 18.0

    header_height: float = 18.0
    row_line_height: float = 12.0
    group_header_height: float = 16.0
    cell_pad_x: float = 4.0
    cell_pad_y: float = 3.0
    min_wrap_width: float = 20.0

    font: str = "Helvetica"
    bold_font: str = "Helvetica-Bold"
    title_size: float = 14.0
    subtitle_size: float = 10.0
    header_size: float = 9.5
    body_size: float = 9.0
    group_size: float = 10.5
    pager_size: float = 9.0

    text_color: RGB = (0.0, 0.0, 0.0)
    grid_color: RGB = (0.8, 0.82, 0.86)
    header_background: RGB = (0.93, 0.95, 0.98)
    group_background: RGB = (0.88, 0.91, 0.95)

    upper_case_values: bool = True
    timezone: str = "America/Sao_Paulo"
    datetime_format: str = "%d/%m/%Y %H:%M"

    group_by_status: bool = False
    status_column: str = "status"
    status_groups: tuple[StatusGroup, ...] = ()

    def __post_init__(self) -> None:
        for name in ("row_line_height", "header_height", "group_header_height", "body_size", "title_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0")
        for name in ("margin_x", "gutter_x", "margin_top", "margin_bottom", "footer_reserve", "cell_pad_x", "cell_pad_y"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone: {self.timezone!r}") from e

    @property
    def min_y(self) -> float:
        return self.margin_bottom + self.footer_reserve
