from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any


class FieldId(str, Enum):
    CONNECTION_NUMBER = "connection_number"
    ORDER_NUMBER = "order_number"
    REGISTRATION_NUMBER = "registration_number"


@dataclass(frozen=True, slots=True)
class ExtractedFields:
    """
    Identifiers found in one half-page.

    Normalized values are digits-only (leading zeros preserved) or None when
    absent; never the empty string. `raw_*` keeps the matched text for audit.
    """

    connection_number: str | None = None
    order_number: str | None = None
    registration_number: str | None = None
    raw_connection_number: str | None = None
    raw_order_number: str | None = None
    raw_registration_number: str | None = None

    def get(self, field: FieldId) -> str | None:
        return getattr(self, field.value)

    def with_value(self, field: FieldId, value: str | None, *, raw: str | None = None) -> "ExtractedFields":
        return replace(self, **{field.value: value, f"raw_{field.value}": raw})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
