from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any, Mapping

from contracts.placeholders import Placeholders

from .contracts import InfoLine

# Priority-ordered source columns per logical field; first non-blank wins.
CANDIDATE_KEYS: dict[str, tuple[str, ...]] = {
    "name": ("solicitante_nome", "nome_solicitante", "solicitante", "nome", "cliente"),
    "phone": ("telefone", "solicitante_telefone", "telefone_solicitante", "tel", "celular", "fone"),
    "document": ("solicitante_documento", "documento_solicitante", "documento", "cpf_cnpj", "cpf", "cnpj"),
    "registration": ("matricula", "matric"),
    "street": ("rua", "logradouro", "endereco"),
    "number": ("numero", "num", "nro"),
    "neighborhood": ("bairro",),
    "reference_point": ("ponto_referencia", "referencia", "ref"),
    "observation": ("observacao", "observacoes", "obs"),
}


@dataclass(frozen=True, slots=True)
class StampSubject:
    """Normalized view of one order row; None means the row had no usable value."""

    name: str | None = None
    phone: str | None = None
    document: str | None = None
    registration: str | None = None
    street: str | None = None
    number: str | None = None
    neighborhood: str | None = None
    reference_point: str | None = None
    observation: str | None = None


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    s = " ".join(str(value).split())
    return s or None


def resolve_subject(row: Mapping[str, Any], candidates: Mapping[str, tuple[str, ...]] = CANDIDATE_KEYS) -> StampSubject:
    values: dict[str, str | None] = {}
    for f in fields(StampSubject):
        values[f.name] = next(
            (v for v in (_clean(row.get(k)) for k in candidates.get(f.name, ())) if v is not None), None
        )
    return StampSubject(**values)


_NON_DIGIT = re.compile(r"\D+")


def format_phone(phone: str | None) -> str | None:
    """`(dd) ddddd-dddd` / `(dd) dddd-dddd`; anything else is returned as given."""
    if not phone:
        return None
    d = _NON_DIGIT.sub("", phone)
    if len(d) == 11:
        return f"({d[:2]}) {d[2:7]}-{d[7:]}"
    if len(d) == 10:
        return f"({d[:2]}) {d[2:6]}-{d[6:]}"
    return phone


def format_address(subject: StampSubject) -> str | None:
    head = ", ".join(p for p in (subject.street, subject.number) if p)
    parts = [p for p in (head, subject.neighborhood) if p]
    return " - ".join(parts) or None


def build_information_lines(subject: StampSubject, placeholders: Placeholders | None = None) -> list[InfoLine]:
    """
    The standard label/value list printed on an order. Observation comes last
    so it is the section shortened first when the page runs out of room.
    """

    ph = placeholders or Placeholders()

    def value(name: str, v: str | None) -> str:
        return v if v else ph.for_field(name)

    return [
        InfoLine("Solicitante", value("name", subject.name)),
        InfoLine("Telefone", value("phone", format_phone(subject.phone))),
        InfoLine("Documento", value("document", subject.document)),
        InfoLine("Matrícula", value("registration", subject.registration)),
        InfoLine("Endereço", value("address", format_address(subject))),
        InfoLine("Ponto de referência", value("reference_point", subject.reference_point)),
        InfoLine("Observação", value("observation", subject.observation)),
    ]
