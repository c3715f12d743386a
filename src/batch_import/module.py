from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Callable, Iterable, Sequence

from contracts.errors import InvalidDocument, OrdemPdfError, PageIndexOutOfRange, UnsupportedLayout
from contracts.raster import Half, RasterPage
from extraction.module import extract_fields
from image_pdf.module import encode_png, package_as_single_page_pdf
from raster.engines import RasterDocument
from raster.module import open_document, page_count
from raster.split import split_halves

from .contracts import HalfPageRecord, ImportBatchResult, ImportConfig, ImportLogEntry, InputFile
from .filenames import build_suggested_filename

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def _as_input_files(files: Iterable[InputFile | tuple[str, bytes]]) -> list[InputFile]:
    out: list[InputFile] = []
    for f in files:
        if isinstance(f, InputFile):
            out.append(f)
        else:
            name, data = f
            out.append(InputFile(name=str(name), data=data))
    return out


def _record_id(file_index: int, source: str, page_index: int, half: Half) -> str:
    """`{n}-{source}-p{page}-{T|B}`; `n` is the file's 1-based position in the batch, so equal names stay distinct."""
    return f"{file_index + 1}-{source}-p{page_index + 1}-{half.tag}"


def _build_record(
    *, file_index: int, source: str, half: Half, raster: RasterPage, config: ImportConfig
) -> HalfPageRecord:
    fields = extract_fields(raster.text_runs, config.extraction)
    return HalfPageRecord(
        record_id=_record_id(file_index, source, raster.page_index, half),
        source_document_name=source,
        page_index=raster.page_index,
        half=half,
        pixel_width=raster.pixel_width,
        pixel_height=raster.pixel_height,
        preview_png=encode_png(raster.image),
        document_bytes=package_as_single_page_pdf(raster.image, raster.pixel_width, raster.pixel_height),
        fields=fields,
        suggested_filename=build_suggested_filename(
            fields, raster.page_index, half, config.filename_prefix
        ),
        include_in_batch=config.include_by_default,
        filename_prefix=config.filename_prefix,
    )


def _process_page(
    *, doc: RasterDocument, file_index: int, source: str, page_index: int, cut_ratio: float, config: ImportConfig
) -> tuple[HalfPageRecord, HalfPageRecord]:
    page = doc.render_page(page_index, scale=config.raster.scale)
    if page.rotation % 360 != 0:
        raise UnsupportedLayout(
            "Rotated pages are not supported by the half-page split",
            detail={"rotation": page.rotation},
        )
    top, bottom = split_halves(page, cut_ratio)
    # Release the full-page raster before packaging the halves.
    del page
    return (
        _build_record(file_index=file_index, source=source, half=Half.TOP, raster=top, config=config),
        _build_record(file_index=file_index, source=source, half=Half.BOTTOM, raster=bottom, config=config),
    )


def count_pages(files: Sequence[InputFile], *, config: ImportConfig) -> list[int | InvalidDocument]:
    """Page count per file, or the parse error for files that are not PDFs."""
    counts: list[int | InvalidDocument] = []
    for f in files:
        try:
            counts.append(page_count(f.data, config=config.raster))
        except InvalidDocument as e:
            counts.append(e)
    return counts


def page_total(files: Iterable[InputFile | tuple[str, bytes]], *, config: ImportConfig | None = None) -> int:
    """Total pages across every readable file; unreadable files count as zero."""
    config = config or ImportConfig()
    return sum(c for c in count_pages(_as_input_files(files), config=config) if isinstance(c, int))


def _page_failure(e: Exception, *, source: str, page_index: int) -> ImportLogEntry:
    where = {"source": source, "page": page_index + 1}
    if isinstance(e, UnsupportedLayout):
        return ImportLogEntry(code="IMPORT_UNSUPPORTED_LAYOUT", message=e.message, detail={**where, **e.detail})
    if isinstance(e, OrdemPdfError):
        code = "IMPORT_INVALID_DOCUMENT" if isinstance(e, InvalidDocument) else "IMPORT_PAGE_FAILED"
        return ImportLogEntry(code=code, message=e.message, detail={**where, **e.detail})
    return ImportLogEntry(code="IMPORT_PAGE_FAILED", message="Page processing failed", detail={**where, "error": repr(e)})


def import_batch(
    files: Iterable[InputFile | tuple[str, bytes]],
    cut_ratio: float | None = None,
    *,
    config: ImportConfig | None = None,
    progress: ProgressCallback | None = None,
) -> ImportBatchResult:
    """
    Split every page of every input PDF into TOP and BOTTOM single-order
    records, in (file, page, TOP, BOTTOM) order.

    Each file is parsed once; its pages are rendered one at a time from that
    handle. A bad file or page is logged and skipped; the batch never raises
    for input problems, even when every input fails.
    """

    config = config or ImportConfig()
    if cut_ratio is None:
        cut_ratio = config.cut_ratio
    elif not (0.0 < cut_ratio < 1.0):
        raise ValueError("cut_ratio must be within (0, 1)")

    inputs = _as_input_files(files)
    records: list[HalfPageRecord] = []
    log: list[ImportLogEntry] = []
    processed = 0

    with ExitStack() as stack:
        opened: list[RasterDocument | InvalidDocument] = []
        for f in inputs:
            try:
                opened.append(stack.enter_context(open_document(f.data, config=config.raster)))
            except InvalidDocument as e:
                opened.append(e)
        pages_total = sum(d.page_count for d in opened if isinstance(d, RasterDocument))

        for file_index, (f, doc) in enumerate(zip(inputs, opened)):
            if isinstance(doc, InvalidDocument):
                logger.warning("skipping %s: %s", f.name, doc.message)
                log.append(
                    ImportLogEntry(
                        code="IMPORT_INVALID_DOCUMENT",
                        message=doc.message,
                        detail={"source": f.name, **doc.detail},
                    )
                )
                continue
            if doc.page_count == 0:
                logger.warning("skipping %s: document has no pages", f.name)
                log.append(
                    ImportLogEntry(
                        code="IMPORT_EMPTY_DOCUMENT",
                        message="Document has no pages",
                        detail={"source": f.name},
                    )
                )
                doc.close()
                continue

            logger.info("importing %s (%d pages, cut_ratio=%.2f)", f.name, doc.page_count, cut_ratio)
            for page_index in range(doc.page_count):
                try:
                    records.extend(
                        _process_page(
                            doc=doc,
                            file_index=file_index,
                            source=f.name,
                            page_index=page_index,
                            cut_ratio=cut_ratio,
                            config=config,
                        )
                    )
                except PageIndexOutOfRange:
                    raise
                except OrdemPdfError as e:
                    logger.warning("skipping %s page %d: %s", f.name, page_index + 1, e.message)
                    log.append(_page_failure(e, source=f.name, page_index=page_index))
                except Exception as e:
                    logger.warning("skipping %s page %d", f.name, page_index + 1, exc_info=True)
                    log.append(_page_failure(e, source=f.name, page_index=page_index))
                processed += 1
                if progress is not None:
                    progress(processed, pages_total)
            doc.close()

    return ImportBatchResult(records=records, log=log, pages_total=pages_total, pages_processed=processed)
