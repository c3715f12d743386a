from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from contracts.fields import ExtractedFields
from contracts.raster import Half
from extraction.contracts import ExtractionConfig
from raster.contracts import DEFAULT_CUT_RATIO, RasterConfig


@dataclass(frozen=True, slots=True)
class InputFile:
    name: str
    data: bytes


@dataclass(frozen=True, slots=True)
class ImportConfig:
    """
    Batch import configuration.

    `rederive_filename_after_manual_edit` controls what a field edit does to a
    filename the user typed by hand: False keeps the manual name, True
    regenerates it from the fields (and drops the manual override).
    """

    cut_ratio: float = DEFAULT_CUT_RATIO
    raster: RasterConfig = field(default_factory=RasterConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    filename_prefix: str | None = None
    include_by_default: bool = True
    rederive_filename_after_manual_edit: bool = False

    def __post_init__(self) -> None:
        if not (0.0 < self.cut_ratio < 1.0):
            raise ValueError("cut_ratio must be within (0, 1)")


@dataclass(frozen=True, slots=True)
class HalfPageRecord:
    """
    One single-order document cut out of an input page.

    `suggested_filename` is derived from (connection, order, half, page_index)
    unless `filename_overridden` is set by a manual rename.
    """

    record_id: str
    source_document_name: str
    page_index: int  # 0-based
    half: Half
    pixel_width: int
    pixel_height: int
    preview_png: bytes
    document_bytes: bytes
    fields: ExtractedFields
    suggested_filename: str
    include_in_batch: bool = True
    filename_overridden: bool = False
    filename_prefix: str | None = None

    def summary(self) -> dict[str, Any]:
        """JSON-ready view without the binary payloads."""
        return {
            "record_id": self.record_id,
            "source_document_name": self.source_document_name,
            "page_index": self.page_index,
            "half": self.half.value,
            "pixel_width": self.pixel_width,
            "pixel_height": self.pixel_height,
            "fields": self.fields.to_dict(),
            "suggested_filename": self.suggested_filename,
            "include_in_batch": self.include_in_batch,
            "filename_overridden": self.filename_overridden,
        }


@dataclass(frozen=True, slots=True)
class ImportLogEntry:
    code: str
    message: str
    detail: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ImportBatchResult:
    """
    Partial success is normal: `records` holds every page that worked and
    `log` every page or file that was skipped.
    """

    records: list[HalfPageRecord]
    log: list[ImportLogEntry]
    pages_total: int
    pages_processed: int

    @property
    def ok(self) -> bool:
        return not self.log

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "pages_total": self.pages_total,
            "pages_processed": self.pages_processed,
            "records": [r.summary() for r in self.records],
            "log": [e.to_dict() for e in self.log],
        }
