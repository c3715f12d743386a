from __future__ import annotations

import re
from datetime import date, datetime
from typing import Iterable

from contracts.fields import ExtractedFields
from contracts.raster import Half

MAX_FILENAME_LENGTH = 180
PLACEHOLDER = "X"

_ILLEGAL = re.compile(r'[\\/:*?"<>|\x00-\x1f]')
_WS = re.compile(r"\s+")
_UNDERSCORES = re.compile(r"_{2,}")
_TRAILING = re.compile(r"[.\s]+$")
_RESERVED = re.compile(r"^(con|prn|aux|nul|com[1-9]|lpt[1-9])$", re.IGNORECASE)


def split_ext(name: str) -> tuple[str, str]:
    """Split on the last dot; a leading or trailing dot is not an extension."""
    i = name.rfind(".")
    if 0 < i < len(name) - 1:
        return name[:i], name[i:]
    return name, ""


def sanitize_filename(name: str, max_len: int = MAX_FILENAME_LENGTH) -> str:
    """
    Make a name safe on Windows and POSIX: illegal characters become "_",
    whitespace runs become "_", trailing dots/spaces are dropped, reserved
    device names get a "_" prefix, and the length is capped (extension kept).
    """

    out = _ILLEGAL.sub("_", name or "")
    out = _WS.sub("_", out.strip())
    out = _UNDERSCORES.sub("_", out)
    out = _TRAILING.sub("", out)

    base, ext = split_ext(out)
    if _RESERVED.match(base):
        out = f"_{out}"
        base = f"_{base}"

    if not out:
        return "arquivo"
    if len(out) > max_len:
        if ext and len(ext) < max_len:
            out = base[: max_len - len(ext)] + ext
        else:
            out = out[:max_len]
    return out


def ensure_pdf_extension(name: str) -> str:
    """Force a lowercase `.pdf` extension."""
    n = name.strip()
    if n.lower().endswith(".pdf"):
        return n[:-4] + ".pdf"
    return f"{n}.pdf"


def build_suggested_filename(
    fields: ExtractedFields, page_index: int, half: Half, prefix: str | None = None
) -> str:
    """
    `[PREFIX_]LIG_{connection|X}_OS_{order|X}_p{page_index+1}_{T|B}.pdf`
    """

    parts: list[str] = []
    if prefix and prefix.strip():
        parts.append(sanitize_filename(prefix.strip().upper()))
    parts.append(f"LIG_{fields.connection_number or PLACEHOLDER}")
    parts.append(f"OS_{fields.order_number or PLACEHOLDER}")
    parts.append(f"p{page_index + 1}_{half.tag}")
    return ensure_pdf_extension(sanitize_filename("_".join(parts)))


def dedupe_against(seen_lower: set[str], name: str) -> str:
    """
    Return `name`, or `name_1.ext`, `name_2.ext`, ... whichever is not yet in
    `seen_lower` (compared case-insensitively), and record it as taken.
    """

    base, ext = split_ext(name)
    candidate = name
    k = 1
    while candidate.lower() in seen_lower:
        candidate = f"{base}_{k}{ext}"
        k += 1
    seen_lower.add(candidate.lower())
    return candidate


def dedupe_names(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    return [dedupe_against(seen, n) for n in names]


def default_archive_name(today: date | None = None) -> str:
    today = today or date.today()
    return f"ordens_corte_{today.isoformat()}.zip"


def with_timestamp(name: str, now: datetime | None = None) -> str:
    """`name_YYYYMMDD-HHMMSS.ext`, for exports that must not overwrite earlier runs."""
    now = now or datetime.now()
    base, ext = split_ext(name)
    return f"{base}_{now.strftime('%Y%m%d-%H%M%S')}{ext}"
