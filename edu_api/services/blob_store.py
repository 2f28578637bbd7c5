"""Object storage for assignment attachments.

Uploads go to a single S3 bucket. A successful upload returns the object's
URL, which is what gets stored on the assignment row.
"""
import logging
import os
from datetime import datetime, timezone
from functools import lru_cache
from typing import Protocol
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from edu_api.core import config
from edu_api.core.errors import UploadError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def upload(self, key: str, data: bytes, content_type: str | None = None) -> str:
        """Store ``data`` under ``key`` and return a durable reference to it."""
        ...


def build_object_key(filename: str, now: datetime | None = None) -> str:
    """Key an upload by upload time plus the client's file name.

    Only the base name is kept so clients cannot address other prefixes.
    """
    timestamp = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    stamp = timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    base_name = os.path.basename(filename.replace("\\", "/")) or "upload"
    return f"{stamp}-{base_name}"


class S3BlobStore:
    """S3-backed blob store."""

    def __init__(self, bucket: str, region: str, endpoint_url: str | None = None, client=None):
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self._client = client or boto3.client("s3", **self._client_kwargs())

    def _client_kwargs(self) -> dict:
        kwargs = {"region_name": self.region}
        if self.endpoint_url:
            kwargs["endpoint_url"] = self.endpoint_url
        if config.AWS_ACCESS_KEY_ID and config.AWS_SECRET_ACCESS_KEY:
            kwargs["aws_access_key_id"] = config.AWS_ACCESS_KEY_ID
            kwargs["aws_secret_access_key"] = config.AWS_SECRET_ACCESS_KEY
        return kwargs

    def object_url(self, key: str) -> str:
        quoted_key = quote(key)
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{quoted_key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{quoted_key}"

    def upload(self, key: str, data: bytes, content_type: str | None = None) -> str:
        params = {"Bucket": self.bucket, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type

        try:
            self._client.put_object(**params)
        except (BotoCoreError, ClientError) as exc:
            logger.exception("Upload of %s to bucket %s failed", key, self.bucket)
            raise UploadError("Failed to upload file to S3.") from exc

        logger.info("Uploaded %s (%d bytes) to bucket %s", key, len(data), self.bucket)
        return self.object_url(key)


@lru_cache(maxsize=1)
def get_blob_store() -> BlobStore:
    return S3BlobStore(
        bucket=config.S3_BUCKET,
        region=config.AWS_REGION,
        endpoint_url=config.AWS_ENDPOINT_URL,
    )
