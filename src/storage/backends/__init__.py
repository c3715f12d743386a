from .base import PDF_CONTENT_TYPE, BlobStore
from .local import LocalBlobStore
from .supabase import SupabaseBlobStore

__all__ = ["BlobStore", "LocalBlobStore", "PDF_CONTENT_TYPE", "SupabaseBlobStore"]
