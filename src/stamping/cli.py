from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from contracts.errors import OrdemPdfError
from contracts.placeholders import WILDCARD, Placeholders
from storage.backends import BlobStore, LocalBlobStore, SupabaseBlobStore
from storage.contracts import DEFAULT_BUCKET, SupabaseStorageConfig

from .contracts import InfoLine, LayoutMode, StampConfig
from .fields import build_information_lines, resolve_subject
from .module import stamp, stamp_stored_order

logger = logging.getLogger(__name__)


def _info_line(value: str) -> InfoLine:
    label, sep, text = value.partition("=")
    if not sep:
        return InfoLine(None, value.strip())
    if not label.strip():
        raise argparse.ArgumentTypeError(f'expected "Label=Value" or free text, got {value!r}')
    return InfoLine(label.strip(), text.strip())


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ordens-stamp",
        description="Overlay solicitant/address information on the first page of an order PDF.",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--pdf", type=Path, help="Local order PDF.")
    src.add_argument("--storage-path", help="Stored document path, e.g. religacoes/<owner>/<id>/ordem.pdf.")

    p.add_argument("--store-root", type=Path, default=None, help="Use a local directory as the document store.")
    p.add_argument("--supabase-url", default=os.environ.get("SUPABASE_URL"), help="Default: $SUPABASE_URL.")
    p.add_argument("--supabase-key", default=os.environ.get("SUPABASE_KEY"), help="Default: $SUPABASE_KEY.")
    p.add_argument("--bucket", default=DEFAULT_BUCKET)
    p.add_argument("--upload-to", default=None, help="Also upload the stamped copy to this storage path.")

    p.add_argument("--row", type=Path, default=None, help="JSON object with the order row's columns.")
    p.add_argument(
        "--line",
        dest="lines",
        action="append",
        type=_info_line,
        default=[],
        help='Extra "Label=Value" or free-text line (repeatable); used alone when --row is not given.',
    )
    p.add_argument("--placeholder", default=None, help="Text for absent values (default: em dash).")
    p.add_argument("--mode", choices=[m.value for m in LayoutMode], default=LayoutMode.BORDERED_CARD.value)
    p.add_argument("--title", default=None, help="Card title (bordered_card mode).")
    p.add_argument("--out", required=True, type=Path, help="Output PDF file.")
    p.add_argument("--log-level", default="INFO")
    return p


def _store_from_args(args: argparse.Namespace) -> BlobStore:
    if args.store_root is not None:
        return LocalBlobStore(args.store_root)
    return SupabaseBlobStore(
        SupabaseStorageConfig(url=args.supabase_url or "", key=args.supabase_key or "", bucket=args.bucket)
    )


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        lines: list[InfoLine] = []
        if args.row is not None:
            row = json.loads(args.row.read_text(encoding="utf-8"))
            if not isinstance(row, dict):
                raise ValueError("--row must contain a JSON object")
            placeholders = Placeholders({WILDCARD: args.placeholder}) if args.placeholder is not None else None
            lines.extend(build_information_lines(resolve_subject(row), placeholders))
        lines.extend(args.lines)
        if not lines:
            raise ValueError("nothing to stamp: give --row and/or --line")

        config = StampConfig() if args.title is None else StampConfig(title=args.title)

        if args.pdf is not None:
            stamped = stamp(args.pdf.read_bytes(), lines, args.mode, config=config)
        else:
            stamped = stamp_stored_order(
                _store_from_args(args), args.storage_path, lines, args.mode, config=config, out_path=args.upload_to
            )
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except OrdemPdfError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_bytes(stamped)
    logger.info("wrote %s", args.out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
