from __future__ import annotations

from dataclasses import dataclass, field

from .patterns import FIELD_PATTERNS, FieldPattern


@dataclass(frozen=True, slots=True)
class ExtractionConfig:
    """
    Identifier extraction parameters.

    `line_tolerance_px` groups text runs whose baselines differ by at most this
    many pixels into one visual line (12 px ~ 6 pt at the default scale 2.0).
    """

    patterns: tuple[FieldPattern, ...] = field(default=FIELD_PATTERNS)
    min_digits: int = 3
    line_tolerance_px: float = 12.0
    registration_fallback_to_connection: bool = True

    def __post_init__(self) -> None:
        if self.min_digits < 1:
            raise ValueError("min_digits must be >= 1")
        if self.line_tolerance_px < 0:
            raise ValueError("line_tolerance_px must be >= 0")
