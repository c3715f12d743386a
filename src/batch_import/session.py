from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from contracts.fields import FieldId

from .contracts import HalfPageRecord, ImportConfig, ImportLogEntry
from .export import download_archive, save_to_folder
from .module import import_batch
from .records import patch_field, patch_filename, patch_include


@dataclass
class ImportSession:
    """
    Review state of one import: the records plus the skipped-page log.

    Records are immutable; every edit swaps in the reducer's result so the
    order of `records` never changes.
    """

    config: ImportConfig = field(default_factory=ImportConfig)
    records: list[HalfPageRecord] = field(default_factory=list)
    log: list[ImportLogEntry] = field(default_factory=list)

    @classmethod
    def from_files(cls, files, *, config: ImportConfig | None = None, progress=None) -> "ImportSession":
        config = config or ImportConfig()
        result = import_batch(files, config=config, progress=progress)
        return cls(config=config, records=list(result.records), log=list(result.log))

    def _index(self, record_id: str) -> int:
        for i, r in enumerate(self.records):
            if r.record_id == record_id:
                return i
        raise KeyError(f"Unknown record: {record_id!r}")

    def _apply(self, record_id: str, fn: Callable[[HalfPageRecord], HalfPageRecord]) -> HalfPageRecord:
        i = self._index(record_id)
        self.records[i] = fn(self.records[i])
        return self.records[i]

    def get(self, record_id: str) -> HalfPageRecord:
        return self.records[self._index(record_id)]

    def update_field(self, record_id: str, field_id: FieldId | str, value: str | None) -> HalfPageRecord:
        fid = FieldId(field_id)
        return self._apply(
            record_id,
            lambda r: patch_field(
                r, fid, value, rederive_manual=self.config.rederive_filename_after_manual_edit
            ),
        )

    def toggle_include(self, record_id: str) -> HalfPageRecord:
        return self._apply(record_id, patch_include)

    def edit_filename(self, record_id: str, new_name: str) -> HalfPageRecord:
        return self._apply(record_id, lambda r: patch_filename(r, new_name))

    def included(self) -> list[HalfPageRecord]:
        return [r for r in self.records if r.include_in_batch]

    def save_to_folder(self, dest_dir: Path, *, subfolder: str | None = None) -> list[Path]:
        return save_to_folder(self.records, dest_dir, subfolder=subfolder)

    def download_archive(self) -> bytes:
        return download_archive(self.records)
