from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from contracts.errors import NoFieldsSelected

from .contracts import FieldDefinition


@dataclass(frozen=True, slots=True)
class ReportFieldSelection:
    """
    Which catalog fields are printed, and in what order.

    Every operation returns a new selection.
    """

    catalog: tuple[FieldDefinition, ...]
    order: tuple[str, ...]
    selected: frozenset[str]

    @classmethod
    def all_of(cls, catalog: Iterable[FieldDefinition]) -> "ReportFieldSelection":
        fields = tuple(catalog)
        ids = tuple(f.id for f in fields)
        if len(set(ids)) != len(ids):
            raise ValueError("field ids must be unique")
        return cls(catalog=fields, order=ids, selected=frozenset(ids))

    def _check(self, field_id: str) -> None:
        if field_id not in self.order:
            raise KeyError(f"Unknown field: {field_id!r}")

    def toggle(self, field_id: str) -> "ReportFieldSelection":
        self._check(field_id)
        return replace(self, selected=self.selected ^ {field_id})

    def select_only(self, field_ids: Iterable[str]) -> "ReportFieldSelection":
        ids = frozenset(field_ids)
        for fid in ids:
            self._check(fid)
        return replace(self, selected=ids)

    def reorder(self, from_id: str, to_id: str) -> "ReportFieldSelection":
        """Move `from_id` to the position currently held by `to_id` (drag and drop)."""
        self._check(from_id)
        self._check(to_id)
        if from_id == to_id:
            return self
        order = list(self.order)
        dst = order.index(to_id)
        order.remove(from_id)
        order.insert(dst, from_id)
        return replace(self, order=tuple(order))

    def ordered_fields(self) -> list[FieldDefinition]:
        by_id = {f.id: f for f in self.catalog}
        out = [by_id[fid] for fid in self.order if fid in self.selected]
        if not out:
            raise NoFieldsSelected("Select at least one field for the report")
        return out
