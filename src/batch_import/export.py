from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Iterable

from contracts.errors import NoRecordsIncluded

from .contracts import HalfPageRecord
from .filenames import dedupe_against, ensure_pdf_extension, sanitize_filename

logger = logging.getLogger(__name__)


def planned_files(records: Iterable[HalfPageRecord]) -> list[tuple[str, bytes]]:
    """
    (unique filename, bytes) for every included record, in record order.

    Names are sanitized, forced to `.pdf` and de-duplicated case-insensitively
    (`name.pdf`, `name_1.pdf`, `name_2.pdf`, ...).

    Raises `NoRecordsIncluded` when nothing is included.
    """

    seen: set[str] = set()
    out: list[tuple[str, bytes]] = []
    for r in records:
        if not r.include_in_batch:
            continue
        name = ensure_pdf_extension(sanitize_filename(r.suggested_filename))
        out.append((dedupe_against(seen, name), r.document_bytes))

    if not out:
        raise NoRecordsIncluded("No records are included in the batch")
    return out


def save_to_folder(
    records: Iterable[HalfPageRecord], dest_dir: Path, *, subfolder: str | None = None
) -> list[Path]:
    """
    Write each included record under its filename in `dest_dir` (optionally a
    sanitized `subfolder` of it). Existing files with the same name are
    overwritten; names within the batch never collide.
    """

    files = planned_files(records)
    target = dest_dir.expanduser()
    if subfolder:
        target = target / sanitize_filename(subfolder)
    target.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for name, data in files:
        out_file = target / name
        out_file.write_bytes(data)
        written.append(out_file)

    logger.info("saved %d files to %s", len(written), target)
    return written


def download_archive(records: Iterable[HalfPageRecord]) -> bytes:
    """
    Package every included record into one ZIP, with the same naming and
    de-duplication rules as `save_to_folder`.
    """

    files = planned_files(records)
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in files:
            zf.writestr(name, data)

    logger.info("packaged %d files into archive", len(files))
    return buf.getvalue()
