"""
Blob stores holding uploaded file bytes.

Local file system for local-dev, S3 for the AWS modes; the Supabase
Storage client lives with the other Supabase adapters.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from notes_api.errors import BlobStoreError
from notes_api.s3.objects import delete_blobs, put_blob

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


class FilesystemBlobStore:
    """Stores blobs as files in a directory; the API serves them under ``public_base_url``."""

    def __init__(self, storage_dir: str = "storage", public_base_url: str = "/v1/blobs"):
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self.public_base_url = public_base_url.rstrip("/")
        logger.info(f"FilesystemBlobStore initialized at {self.storage_dir}")

    def path_for(self, key: str) -> Path:
        # Keys are single path segments; refuse anything that could escape the directory
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise BlobStoreError(f"Invalid blob key: {key!r}")
        return self.storage_dir / key

    def upload(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        try:
            self.path_for(key).write_bytes(data)
        except OSError as e:
            logger.error(f"Error writing blob {key}: {e}")
            raise BlobStoreError(f"Upload of {key} failed: {e}") from e
        logger.info(f"Stored blob {key} ({len(data)} bytes)")

    def get_public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            try:
                self.path_for(key).unlink(missing_ok=True)
            except OSError as e:
                logger.error(f"Error removing blob {key}: {e}")
                raise BlobStoreError(f"Removal of {key} failed: {e}") from e


class S3BlobStore:
    """Stores blobs in an S3 bucket."""

    def __init__(self, bucket_name: str, public_base_url: str, s3_client: Optional["S3Client"] = None,
                 region_name: Optional[str] = None, endpoint_url: Optional[str] = None,
                 aws_access_key_id: Optional[str] = None, aws_secret_access_key: Optional[str] = None):
        self.bucket_name = bucket_name
        self.public_base_url = public_base_url.rstrip("/")
        self.s3_client = s3_client or boto3.client(
            "s3",
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
        )
        logger.info(f"Using S3 bucket: {self.bucket_name}")

    def upload(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        try:
            put_blob(self.s3_client, self.bucket_name, key, data, content_type)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error uploading to S3: {str(e)}")
            raise BlobStoreError(f"Upload of {key} failed: {e}") from e
        logger.info(f"Uploaded {key} to S3 bucket {self.bucket_name}")

    def get_public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def remove(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        if not keys:
            return
        try:
            failed = delete_blobs(self.s3_client, self.bucket_name, keys)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error deleting from S3: {str(e)}")
            raise BlobStoreError(f"Removal from {self.bucket_name} failed: {e}") from e
        if failed:
            raise BlobStoreError(f"S3 could not delete: {', '.join(failed)}")
        logger.info(f"Removed {len(keys)} object(s) from S3 bucket {self.bucket_name}")
