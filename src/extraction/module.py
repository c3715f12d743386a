from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from contracts.fields import ExtractedFields, FieldId
from contracts.raster import TextRun

from .contracts import ExtractionConfig

logger = logging.getLogger(__name__)

_NON_DIGIT = re.compile(r"\D+")


def only_digits(s: str | None) -> str | None:
    """Keep digits only (leading zeros preserved); None when nothing is left."""
    if not s:
        return None
    out = _NON_DIGIT.sub("", s)
    return out or None


@dataclass(slots=True)
class _LineBuilder:
    y: float
    runs: list[TextRun] = field(default_factory=list)


def group_lines(runs: Iterable[TextRun], *, tolerance: float) -> list[str]:
    """
    Group runs into visual lines by baseline Y, then order lines top-to-bottom
    and runs left-to-right within a line.
    """

    builders: list[_LineBuilder] = []
    for run in sorted(runs, key=lambda r: (r.baseline_y, r.baseline_x)):
        text = str(run.text or "").strip()
        if not text:
            continue
        for b in builders:
            if abs(b.y - run.baseline_y) <= tolerance:
                b.runs.append(run)
                # running mean keeps a slanted line together
                b.y = (b.y * (len(b.runs) - 1) + run.baseline_y) / len(b.runs)
                break
        else:
            builders.append(_LineBuilder(y=run.baseline_y, runs=[run]))

    lines: list[str] = []
    for b in sorted(builders, key=lambda b: b.y):
        ordered = sorted(b.runs, key=lambda r: r.baseline_x)
        lines.append(" ".join(str(r.text).strip() for r in ordered))
    return lines


def runs_to_text(runs: Iterable[TextRun], *, config: ExtractionConfig | None = None) -> str:
    config = config or ExtractionConfig()
    return "\n".join(group_lines(runs, tolerance=config.line_tolerance_px))


def extract_fields_from_text(text: str, *, config: ExtractionConfig | None = None) -> ExtractedFields:
    """
    Apply the pattern table to a block of text. First valid match per field
    wins; a field with no match stays None.
    """

    config = config or ExtractionConfig()
    result = ExtractedFields()
    text = text or ""

    for pattern in config.patterns:
        if result.get(pattern.field_id) is not None:
            continue
        for m in pattern.compile().finditer(text):
            raw = m.group(1).strip()
            digits = only_digits(raw)
            if digits is not None and len(digits) >= config.min_digits:
                result = result.with_value(pattern.field_id, digits, raw=raw)
                break

    if (
        config.registration_fallback_to_connection
        and result.registration_number is None
        and result.connection_number is not None
    ):
        # The two identifiers are usually the same physical number.
        result = result.with_value(
            FieldId.REGISTRATION_NUMBER,
            result.connection_number,
            raw=result.raw_connection_number,
        )

    return result


def extract_fields(text_runs: Iterable[TextRun], config: ExtractionConfig | None = None) -> ExtractedFields:
    """
    Best-effort labeled-identifier extraction for one half-page.

    Never raises for odd text: an unparseable block yields all fields absent.
    """

    config = config or ExtractionConfig()
    text = runs_to_text(text_runs, config=config)
    fields = extract_fields_from_text(text, config=config)
    logger.debug(
        "extracted connection=%s order=%s registration=%s",
        fields.connection_number,
        fields.order_number,
        fields.registration_number,
    )
    return fields
