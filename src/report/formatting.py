from __future__ import annotations

import unicodedata
from datetime import date, datetime, timezone
from typing import Any, Mapping
from zoneinfo import ZoneInfo

from contracts.placeholders import Placeholders

from .contracts import FieldDefinition, FieldKind, ReportConfig


def canonical_status(value: Any) -> str:
    """Lower case, accents removed, underscores as spaces, whitespace collapsed."""
    s = unicodedata.normalize("NFD", "" if value is None else str(value))
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    return " ".join(s.lower().replace("_", " ").split())


def parse_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    s = value.strip()
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


def format_datetime(value: Any, config: ReportConfig) -> str | None:
    """
    `dd/mm/aaaa HH:MM` in the report timezone. Naive values are taken as UTC,
    which is how the order tables store timestamps.
    """

    dt = parse_datetime(value)
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(ZoneInfo(config.timezone)).strftime(config.datetime_format)


def format_cell(
    row: Mapping[str, Any],
    field: FieldDefinition,
    config: ReportConfig,
    placeholders: Placeholders | None = None,
) -> str:
    ph = placeholders or Placeholders()
    raw = row.get(field.source_column)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return ph.for_field(field.id)

    if field.kind is FieldKind.DATETIME:
        text = format_datetime(raw, config)
        if text is None:
            return ph.for_field(field.id)
    else:
        text = str(raw)
    return text.upper() if config.upper_case_values else text
