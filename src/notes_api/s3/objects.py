"""Blob reads and writes against an S3 bucket, one object per uploaded file."""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# DeleteObjects accepts at most this many keys per call
MAX_KEYS_PER_DELETE = 1000


def put_blob(s3_client: "S3Client", bucket_name: str, key: str, data: bytes,
             content_type: Optional[str] = None) -> None:
    """Store ``data`` under ``key``; files without a media type are sent as raw bytes."""
    s3_client.put_object(
        Bucket=bucket_name,
        Key=key,
        Body=data,
        ContentType=content_type or DEFAULT_CONTENT_TYPE,
    )


def delete_blobs(s3_client: "S3Client", bucket_name: str, keys: List[str]) -> List[str]:
    """
    Delete ``keys`` in batches that DeleteObjects accepts.

    :return: Keys S3 reported as not deleted.
    """
    failed = []
    for start in range(0, len(keys), MAX_KEYS_PER_DELETE):
        batch = keys[start:start + MAX_KEYS_PER_DELETE]
        response = s3_client.delete_objects(
            Bucket=bucket_name,
            Delete={"Objects": [{"Key": key} for key in batch], "Quiet": True},
        )
        failed.extend(error["Key"] for error in response.get("Errors", []))
    return failed
