"""Picks the editor adapter and its stores from settings."""
import logging
from typing import Optional

from database.kv_store import SQLiteKeyValueStore
from database.local import SQLiteRowStore
from database.supabase_adapter import SupabaseBlobStore, SupabaseRowStore
from notes_api.adapters.base import EditorAdapter
from notes_api.adapters.local import LocalEditorAdapter
from notes_api.adapters.remote import RemoteEditorAdapter
from notes_api.adapters.storage import FilesystemBlobStore, S3BlobStore
from notes_api.config.settings import Settings

logger = logging.getLogger(__name__)


def build_row_store(settings: Settings):
    if settings.row_store == "supabase":
        return SupabaseRowStore(settings.supabase_url, settings.supabase_key, timeout=settings.request_timeout)
    return SQLiteRowStore(settings.db_path)


def build_blob_store(settings: Settings):
    if settings.blob_store == "supabase":
        return SupabaseBlobStore(
            settings.supabase_url,
            settings.supabase_key,
            bucket=settings.supabase_bucket,
            timeout=settings.request_timeout,
        )
    if settings.blob_store == "s3":
        return S3BlobStore(
            bucket_name=settings.s3_bucket_name,
            public_base_url=settings.s3_public_url,
            region_name=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
        )
    return FilesystemBlobStore(settings.storage_dir)


def build_kv_store(settings: Settings) -> SQLiteKeyValueStore:
    return SQLiteKeyValueStore(settings.kv_db_path)


def build_adapter(settings: Settings, kv_store: Optional[SQLiteKeyValueStore] = None) -> EditorAdapter:
    """Build the editor adapter selected by ``settings.storage_backend``."""
    logger.info(f"Creating {settings.storage_backend} editor adapter")
    if settings.storage_backend == "local":
        return LocalEditorAdapter(
            kv_store or build_kv_store(settings),
            messages_key=settings.messages_key,
            files_key=settings.files_key,
        )
    return RemoteEditorAdapter(build_row_store(settings), build_blob_store(settings))
