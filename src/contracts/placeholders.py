from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

DEFAULT_PLACEHOLDER = "—"
WILDCARD = "*"


@dataclass(frozen=True)
class Placeholders:
    """
    Text shown for absent values, per field name, with `"*"` as the
    wildcard default. Passed to formatters at call time.
    """

    values: Mapping[str, str] = field(default_factory=dict)

    def for_field(self, name: str) -> str:
        if name in self.values:
            return self.values[name]
        return self.values.get(WILDCARD, DEFAULT_PLACEHOLDER)
