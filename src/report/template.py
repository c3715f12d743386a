from __future__ import annotations

import logging
from pathlib import Path

import requests

from contracts.errors import TemplateUnavailable

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"


def load_template(
    source: str | Path, *, timeout_s: float = 30.0, session: requests.Session | None = None
) -> bytes:
    """
    Letterhead bytes from a local path or an http(s) URL.

    Raises `TemplateUnavailable` when the asset cannot be fetched, when a URL
    answers with a non-PDF content type, or when a file is not a PDF.
    """

    s = str(source)
    if s.startswith(("http://", "https://")):
        try:
            resp = (session or requests).get(s, timeout=timeout_s)
        except requests.RequestException as e:
            raise TemplateUnavailable(f"Template fetch failed: {e}", detail={"source": s}) from e
        if not resp.ok:
            raise TemplateUnavailable(
                f"Template not found ({resp.status_code}) at {s}", detail={"source": s, "status_code": resp.status_code}
            )
        content_type = (resp.headers.get("content-type") or "").lower()
        if "pdf" not in content_type:
            raise TemplateUnavailable(
                f"Resource at {s} is not a PDF ({content_type or 'no content type'})",
                detail={"source": s, "content_type": content_type},
            )
        data = resp.content
    else:
        path = Path(s).expanduser()
        try:
            data = path.read_bytes()
        except OSError as e:
            raise TemplateUnavailable(f"Template not found at {path}", detail={"source": s}) from e
        if not data.startswith(PDF_MAGIC):
            raise TemplateUnavailable(f"Template at {path} is not a PDF", detail={"source": s})

    logger.debug("loaded template %s (%d bytes)", s, len(data))
    return data
