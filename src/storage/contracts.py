from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_BUCKET = "ordens-pdfs"


class DocumentKind(str, Enum):
    """Fixed filenames an order's documents are stored under."""

    ORDER = "ordem.pdf"
    RECEIPT = "comprovante.pdf"


class ServiceKind(str, Enum):
    CUT = "cortes"
    RECONNECTION = "religacoes"


@dataclass(frozen=True, slots=True)
class SupabaseStorageConfig:
    """
    Hosted object storage settings.

    `url` is the project base URL (e.g. https://xyz.supabase.co); `key` is the
    API key sent both as `apikey` and as the bearer token.
    """

    url: str
    key: str
    bucket: str = DEFAULT_BUCKET
    timeout_s: float = 30.0
    cache_control: str = "3600"

    def __post_init__(self) -> None:
        if not self.url or not self.url.startswith(("http://", "https://")):
            raise ValueError("url must be an http(s) URL")
        if not self.key:
            raise ValueError("key must not be empty")
        if not self.bucket:
            raise ValueError("bucket must not be empty")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
