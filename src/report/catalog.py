from __future__ import annotations

import re
from dataclasses import replace
from typing import Any

from .contracts import Alignment, FieldDefinition, FieldKind, ReportBase, ReportConfig, StatusGroup

# Nominal column widths (points) keyed by the width tokens the report layout was designed with.
WIDTH_TOKENS: dict[str, float] = {
    "w-20": 80,
    "w-28": 112,
    "w-40": 160,
    "w-44": 176,
    "w-48": 192,
    "w-56": 224,
    "w-64": 256,
    "w-[28rem]": 448,
}
DEFAULT_WIDTH = 120.0


def width_for_token(token: str | None, fallback: float = DEFAULT_WIDTH) -> float:
    if not token:
        return fallback
    return float(WIDTH_TOKENS.get(token, fallback))


def _field(
    field_id: str,
    label: str,
    token: str,
    align: Alignment = Alignment.LEFT,
    kind: FieldKind = FieldKind.TEXT,
) -> FieldDefinition:
    return FieldDefinition(
        id=field_id,
        label=label,
        source_column=field_id,
        alignment=align,
        nominal_width=width_for_token(token),
        kind=kind,
    )


_COMMON: tuple[FieldDefinition, ...] = (
    _field("matricula", "Matrícula", "w-28", Alignment.CENTER),
    _field("bairro", "Bairro", "w-48"),
    _field("rua", "Rua", "w-64"),
    _field("numero", "Nº", "w-20", Alignment.CENTER),
    _field("os", "OS", "w-28", Alignment.CENTER),
    _field("ponto_referencia", "Ponto de referência", "w-64"),
    _field("telefone", "Telefone", "w-40", Alignment.CENTER),
)

CUT_FIELDS: tuple[FieldDefinition, ...] = _COMMON + (
    _field("created_at", "Criado em", "w-44", Alignment.CENTER, FieldKind.DATETIME),
)

RECONNECTION_FIELDS: tuple[FieldDefinition, ...] = _COMMON + (
    _field("ativa_em", "Ativa em", "w-44", Alignment.CENTER, FieldKind.DATETIME),
)

CUT_STATUS_GROUPS: tuple[StatusGroup, ...] = (
    StatusGroup("aguardando corte", "AGUARDANDO CORTE"),
    StatusGroup("cortada", "CORTADA"),
)

RECONNECTION_STATUS_GROUPS: tuple[StatusGroup, ...] = (
    StatusGroup("aguardando religacao", "AGUARDANDO RELIGAÇÃO"),
    StatusGroup("ativa", "ATIVA"),
)

_TITLES = {
    ReportBase.CUT: "RELATÓRIO DE CORTES",
    ReportBase.RECONNECTION: "RELATÓRIO DE RELIGAÇÕES",
}

_FILENAME_KIND = {
    ReportBase.CUT: "relatorio-cortes",
    ReportBase.RECONNECTION: "relatorio-religacoes",
}


def fields_for(base: ReportBase | str) -> tuple[FieldDefinition, ...]:
    return CUT_FIELDS if ReportBase(base) is ReportBase.CUT else RECONNECTION_FIELDS


def config_for(base: ReportBase | str, **overrides: Any) -> ReportConfig:
    """Report config with the base's title and status groups, plus any overrides."""
    b = ReportBase(base)
    groups = CUT_STATUS_GROUPS if b is ReportBase.CUT else RECONNECTION_STATUS_GROUPS
    return replace(ReportConfig(title=_TITLES[b], status_groups=groups), **overrides)


def date_range_label(start: str | None, end: str | None, suffix: str | None = None) -> str:
    label = f"DE {(start or '-').upper()} ATÉ {(end or '-').upper()}"
    if suffix:
        label = f"{label}  —  {suffix.upper()}"
    return label


def suggest_report_filename(base: ReportBase | str, start: str | None, end: str | None) -> str:
    """`relatorio-cortes-{start}-a-{end}.pdf`, restricted to `[A-Za-z0-9._-]`."""
    name = f"{_FILENAME_KIND[ReportBase(base)]}-{start or 'inicio'}-a-{end or 'fim'}.pdf"
    return re.sub(r"[^a-zA-Z0-9._-]+", "_", name)
