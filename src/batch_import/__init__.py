"""
Batch import: every page of every input PDF -> two single-order records,
reviewed through pure reducers and exported to a folder or a ZIP.
"""

from .contracts import HalfPageRecord, ImportBatchResult, ImportConfig, ImportLogEntry, InputFile
from .export import download_archive, planned_files, save_to_folder
from .filenames import (
    build_suggested_filename,
    dedupe_names,
    default_archive_name,
    ensure_pdf_extension,
    sanitize_filename,
    split_ext,
    with_timestamp,
)
from .module import import_batch, page_total
from .records import derive_filename, patch_field, patch_filename, patch_include
from .session import ImportSession

__all__ = [
    "HalfPageRecord",
    "ImportBatchResult",
    "ImportConfig",
    "ImportLogEntry",
    "ImportSession",
    "InputFile",
    "build_suggested_filename",
    "dedupe_names",
    "default_archive_name",
    "derive_filename",
    "download_archive",
    "ensure_pdf_extension",
    "import_batch",
    "page_total",
    "patch_field",
    "patch_filename",
    "patch_include",
    "planned_files",
    "sanitize_filename",
    "save_to_folder",
    "split_ext",
    "with_timestamp",
]
