from __future__ import annotations

import logging
from pathlib import Path

from contracts.errors import StorageError

from .base import PDF_CONTENT_TYPE, BlobStore

logger = logging.getLogger(__name__)


class LocalBlobStore(BlobStore):
    """Directory-rooted store; every path must resolve under `root`."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root).expanduser().resolve()

    @property
    def backend_id(self) -> str:
        return "local"

    def _resolve(self, path: str) -> Path:
        if not path or path.startswith(("/", "\\")) or (":" in path and "\\" in path):
            raise StorageError(f"Expected a relative storage path, got: {path!r}", detail={"path": path})

        candidate = (self.root / path).resolve()
        if not candidate.is_relative_to(self.root) or candidate == self.root:
            raise StorageError(
                f"Path traversal or external reference detected: path={path!r}", detail={"path": path}
            )
        return candidate

    def upload(self, path: str, data: bytes, content_type: str = PDF_CONTENT_TYPE) -> str:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise StorageError(str(e), detail={"path": path}) from e
        logger.debug("stored %s (%d bytes, %s)", path, len(data), content_type)
        return path

    def download(self, path: str) -> bytes:
        target = self._resolve(path)
        try:
            return target.read_bytes()
        except OSError as e:
            raise StorageError(str(e), detail={"path": path}) from e

    def get_public_url(self, path: str) -> str:
        return self._resolve(path).as_uri()
