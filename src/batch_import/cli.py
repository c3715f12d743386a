from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from contracts.errors import OrdemPdfError
from extraction.contracts import ExtractionConfig
from raster.contracts import DEFAULT_CUT_RATIO, DEFAULT_SCALE, RasterConfig

from .contracts import ImportConfig, InputFile
from .export import download_archive, save_to_folder
from .filenames import default_archive_name
from .module import import_batch

logger = logging.getLogger(__name__)

CUT_RATIO_MIN = 0.35
CUT_RATIO_MAX = 0.65


def _cut_ratio(value: str) -> float:
    try:
        r = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if not (CUT_RATIO_MIN <= r <= CUT_RATIO_MAX):
        raise argparse.ArgumentTypeError(f"cut ratio must be within [{CUT_RATIO_MIN}, {CUT_RATIO_MAX}]")
    return r


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ordens-import",
        description="Split two-orders-per-page PDFs into one PDF per order, named from the extracted identifiers.",
    )
    p.add_argument("pdfs", nargs="+", type=Path, help="Input PDF files, processed in the given order.")
    out = p.add_mutually_exclusive_group(required=True)
    out.add_argument("--out-dir", type=Path, help="Write one PDF per included half into this folder.")
    out.add_argument("--out-zip", type=Path, help="Write every included half into one ZIP archive.")
    p.add_argument("--subfolder", default=None, help="Optional subfolder of --out-dir.")
    p.add_argument(
        "--cut-ratio",
        type=_cut_ratio,
        default=DEFAULT_CUT_RATIO,
        help="Fraction of the page height assigned to the top half (0.35-0.65).",
    )
    p.add_argument("--scale", type=float, default=DEFAULT_SCALE, help="Render scale (points -> pixels).")
    p.add_argument("--prefix", default=None, help='Optional filename prefix, e.g. "CORTE".')
    p.add_argument(
        "--no-registration-fallback",
        action="store_true",
        help="Do not use the connection number when no registration number is found.",
    )
    p.add_argument("--summary", type=Path, default=None, help="Optional JSON summary output file.")
    p.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...).")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = ImportConfig(
            cut_ratio=args.cut_ratio,
            raster=RasterConfig(scale=args.scale),
            extraction=ExtractionConfig(registration_fallback_to_connection=not args.no_registration_fallback),
            filename_prefix=args.prefix,
        )
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    files: list[InputFile] = []
    for path in args.pdfs:
        try:
            files.append(InputFile(name=path.name, data=path.read_bytes()))
        except OSError as e:
            print(f"error: cannot read {path}: {e}", file=sys.stderr)
            return 2

    result = import_batch(files, config=config)

    try:
        if args.out_dir is not None:
            written = save_to_folder(result.records, args.out_dir, subfolder=args.subfolder)
            logger.info("wrote %d files", len(written))
        else:
            out_zip = args.out_zip
            if out_zip.suffix == "" or out_zip.is_dir():
                out_zip = out_zip / default_archive_name()
            out_zip.parent.mkdir(parents=True, exist_ok=True)
            out_zip.write_bytes(download_archive(result.records))
            logger.info("wrote %s", out_zip)
    except OrdemPdfError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.summary is not None:
        args.summary.parent.mkdir(parents=True, exist_ok=True)
        args.summary.write_text(
            json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
