"""
Object storage collaborator for order documents (upload, download, public URL).
"""

from .backends import PDF_CONTENT_TYPE, BlobStore, LocalBlobStore, SupabaseBlobStore
from .contracts import DEFAULT_BUCKET, DocumentKind, ServiceKind, SupabaseStorageConfig
from .paths import order_document_path

__all__ = [
    "BlobStore",
    "DEFAULT_BUCKET",
    "DocumentKind",
    "LocalBlobStore",
    "PDF_CONTENT_TYPE",
    "ServiceKind",
    "SupabaseBlobStore",
    "SupabaseStorageConfig",
    "order_document_path",
]
