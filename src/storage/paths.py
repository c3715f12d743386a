from __future__ import annotations

from .contracts import DocumentKind, ServiceKind


def _segment(value: str, what: str) -> str:
    s = str(value).strip().strip("/")
    if not s or "/" in s or s in (".", ".."):
        raise ValueError(f"invalid {what}: {value!r}")
    return s


def order_document_path(
    service: ServiceKind | str, owner_id: str, record_id: str, kind: DocumentKind | str = DocumentKind.ORDER
) -> str:
    """
    `{service}/{owner_id}/{record_id}/{ordem.pdf|comprovante.pdf}`

    Built from identifiers only, never from document content.
    """

    return "/".join(
        (
            ServiceKind(service).value,
            _segment(owner_id, "owner_id"),
            _segment(record_id, "record_id"),
            DocumentKind(kind).value,
        )
    )
