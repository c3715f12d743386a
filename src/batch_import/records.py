from __future__ import annotations

from dataclasses import replace

from contracts.fields import FieldId
from extraction.module import only_digits

from .contracts import HalfPageRecord
from .filenames import build_suggested_filename, ensure_pdf_extension, sanitize_filename


def derive_filename(record: HalfPageRecord) -> str:
    return build_suggested_filename(record.fields, record.page_index, record.half, record.filename_prefix)


def patch_field(
    record: HalfPageRecord, field: FieldId, value: str | None, *, rederive_manual: bool = False
) -> HalfPageRecord:
    """
    Set one identifier (kept digits-only; blank means absent) and re-derive
    the filename. A manually renamed record keeps its name unless
    `rederive_manual` is True.
    """

    raw = None if value is None else value.strip() or None
    fields = record.fields.with_value(field, only_digits(raw), raw=raw)
    out = replace(record, fields=fields)

    if out.filename_overridden and not rederive_manual:
        return out
    return replace(out, suggested_filename=derive_filename(out), filename_overridden=False)


def patch_filename(record: HalfPageRecord, name: str) -> HalfPageRecord:
    """
    Manual rename: sanitized, `.pdf` enforced, detached from derivation.
    A name with nothing before the extension (".pdf") reverts to the derived one.
    """

    cleaned = ensure_pdf_extension(sanitize_filename(name))
    if not cleaned[:-4].strip("._"):
        return replace(record, suggested_filename=derive_filename(record), filename_overridden=False)
    return replace(record, suggested_filename=cleaned, filename_overridden=True)


def patch_include(record: HalfPageRecord, include: bool | None = None) -> HalfPageRecord:
    """Toggle inclusion, or set it explicitly when `include` is given."""
    value = (not record.include_in_batch) if include is None else bool(include)
    return replace(record, include_in_batch=value)
