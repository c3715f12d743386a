from __future__ import annotations

import re
from dataclasses import dataclass

from contracts.fields import FieldId

# Accented/unaccented spellings folded into one character class per letter.
A = "aàáâãä"
E = "eèéêë"
I = "iìíîï"
O = "oòóôõö"
U = "uùúûü"
C = "cç"

# Digits possibly broken by single separators: "08.561", "254 651", "12-3".
DIGIT_RUN = r"\d+(?:[ .\-]\d+)*"

SEPARATOR = r"\s*[:\-–]?\s*"


@dataclass(frozen=True, slots=True)
class FieldPattern:
    """
    One row of the identifier table: a label phrase followed by a value.

    Supporting a new document layout means adding a row here, not code.
    """

    field_id: FieldId
    label_pattern: str
    value_shape: str = DIGIT_RUN
    description: str = ""

    def compile(self) -> re.Pattern[str]:
        return re.compile(
            rf"(?:{self.label_pattern}){SEPARATOR}({self.value_shape})",
            re.IGNORECASE,
        )


FIELD_PATTERNS: tuple[FieldPattern, ...] = (
    FieldPattern(
        field_id=FieldId.CONNECTION_NUMBER,
        label_pattern=rf"\b(?:liga[{C}][{A}]o\b|lig\b\.?)",
        description="LIGAÇÃO / LIGACAO / LIG. / LIG",
    ),
    FieldPattern(
        field_id=FieldId.ORDER_NUMBER,
        label_pattern=(
            rf"\b(?:ordem\s+de\s+servi[{C}][{O}]|o\.?\s?s\.?)(?![a-z])"
            rf"(?:\s*(?:n[{U}]m(?:ero)?\b\.?|n\s?[º°o]\b\.?|n[º°]|n\.))?"
        ),
        description="ORDEM DE SERVIÇO NÚMERO / OS Nº / O.S. N°",
    ),
    FieldPattern(
        field_id=FieldId.REGISTRATION_NUMBER,
        label_pattern=rf"\bmatr[{I}]c(?:ula\b|\.|\b)",
        description="MATRÍCULA / MATRICULA / MATRIC.",
    ),
)
