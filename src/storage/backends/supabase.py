from __future__ import annotations

import logging
from urllib.parse import quote

import requests

from contracts.errors import StorageError

from ..contracts import SupabaseStorageConfig
from .base import PDF_CONTENT_TYPE, BlobStore

logger = logging.getLogger(__name__)


class SupabaseBlobStore(BlobStore):
    """
    Hosted storage REST API:

    - upload:   POST {url}/storage/v1/object/{bucket}/{path}   (x-upsert: true)
    - download: GET  {url}/storage/v1/object/{bucket}/{path}
    - public:        {url}/storage/v1/object/public/{bucket}/{path}
    """

    def __init__(self, config: SupabaseStorageConfig, *, session: requests.Session | None = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    @property
    def backend_id(self) -> str:
        return "supabase"

    def _object_url(self, path: str, *, public: bool = False) -> str:
        base = self.config.url.rstrip("/")
        scope = "object/public" if public else "object"
        return f"{base}/storage/v1/{scope}/{quote(self.config.bucket)}/{quote(path.lstrip('/'))}"

    def _headers(self) -> dict[str, str]:
        return {"apikey": self.config.key, "Authorization": f"Bearer {self.config.key}"}

    def _check(self, resp: requests.Response, *, path: str) -> None:
        if resp.ok:
            return
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message") or body.get("error") or resp.text
        else:
            message = resp.text
        raise StorageError(
            message or f"HTTP {resp.status_code}",
            detail={"path": path, "status_code": resp.status_code},
        )

    def upload(self, path: str, data: bytes, content_type: str = PDF_CONTENT_TYPE) -> str:
        headers = {
            **self._headers(),
            "Content-Type": content_type,
            "x-upsert": "true",
            "cache-control": self.config.cache_control,
        }
        try:
            resp = self.session.post(
                self._object_url(path), data=data, headers=headers, timeout=self.config.timeout_s
            )
        except requests.RequestException as e:
            raise StorageError(str(e), detail={"path": path}) from e
        self._check(resp, path=path)
        logger.info("uploaded %s to bucket %s", path, self.config.bucket)
        return path

    def download(self, path: str) -> bytes:
        try:
            resp = self.session.get(self._object_url(path), headers=self._headers(), timeout=self.config.timeout_s)
        except requests.RequestException as e:
            raise StorageError(str(e), detail={"path": path}) from e
        self._check(resp, path=path)
        return resp.content

    def get_public_url(self, path: str) -> str:
        return self._object_url(path, public=True)
