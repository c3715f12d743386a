from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from contracts.errors import OrdemPdfError
from contracts.placeholders import WILDCARD, Placeholders

from .catalog import config_for, date_range_label, fields_for, suggest_report_filename
from .contracts import ReportBase
from .module import compose_report
from .selection import ReportFieldSelection
from .template import load_template

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ordens-report",
        description="Render a paginated cut/reconnection report over a letterhead PDF.",
    )
    p.add_argument("--base", choices=[b.value for b in ReportBase], default=ReportBase.CUT.value)
    p.add_argument("--rows", required=True, type=Path, help="JSON file with a list of row objects.")
    p.add_argument("--template", required=True, help="Letterhead PDF path or http(s) URL.")
    p.add_argument(
        "--fields",
        default=None,
        help="Comma-separated field ids in print order (default: every catalog field).",
    )
    p.add_argument("--start", default=None, help="Period start shown in the subtitle and filename.")
    p.add_argument("--end", default=None, help="Period end shown in the subtitle and filename.")
    p.add_argument("--subtitle-suffix", default=None, help="Text appended to the subtitle.")
    p.add_argument("--group-by-status", action="store_true", help="Section the rows by status.")
    p.add_argument("--timezone", default="America/Sao_Paulo")
    p.add_argument("--placeholder", default=None, help="Text for empty cells (default: em dash).")
    p.add_argument("--out", type=Path, default=None, help="Output file or directory (default: suggested name).")
    p.add_argument("--log-level", default="INFO")
    return p


def _selection(base: ReportBase, requested: str | None) -> ReportFieldSelection:
    selection = ReportFieldSelection.all_of(fields_for(base))
    if not requested:
        return selection
    ids = [s.strip() for s in requested.split(",") if s.strip()]
    selection = selection.select_only(ids)
    # Move each requested id into place, front to back.
    for position, fid in enumerate(ids):
        current = selection.order[position]
        if current != fid:
            selection = selection.reorder(fid, current)
    return selection


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    base = ReportBase(args.base)
    try:
        rows = json.loads(args.rows.read_text(encoding="utf-8"))
        if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
            raise ValueError("--rows must contain a JSON list of objects")
        fields = _selection(base, args.fields).ordered_fields()
        config = config_for(base, group_by_status=args.group_by_status, timezone=args.timezone)
        placeholders = Placeholders({WILDCARD: args.placeholder}) if args.placeholder is not None else None
    except KeyError as e:
        print(f"error: unknown field {e}", file=sys.stderr)
        return 2
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except OrdemPdfError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2

    try:
        template = load_template(args.template)
        pdf = compose_report(
            template,
            fields,
            rows,
            date_range_label(args.start, args.end, args.subtitle_suffix),
            config=config,
            placeholders=placeholders,
        )
    except OrdemPdfError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    out = args.out
    suggested = suggest_report_filename(base, args.start, args.end)
    if out is None:
        out = Path(suggested)
    elif out.is_dir():
        out = out / suggested
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(pdf)
    logger.info("wrote %s", out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
