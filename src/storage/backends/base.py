from __future__ import annotations

from abc import ABC, abstractmethod

PDF_CONTENT_TYPE = "application/pdf"


class BlobStore(ABC):
    """
    Object storage collaborator.

    Paths are opaque "/"-separated keys; uploads overwrite (upsert). Failures
    raise `contracts.errors.StorageError` with the underlying message kept.
    No retries at this layer.
    """

    @property
    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def upload(self, path: str, data: bytes, content_type: str = PDF_CONTENT_TYPE) -> str:
        """Store `data` under `path` and return the stored path."""
        raise NotImplementedError

    @abstractmethod
    def download(self, path: str) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        raise NotImplementedError
