"""S3-compatible object storage backend."""

import logging
from datetime import datetime
from typing import Optional
from urllib.parse import quote, unquote

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from bakery.storage.base import FileInfo, ObjectStorage

logger = logging.getLogger(__name__)


class S3Storage(ObjectStorage):
    """
    S3-compatible object storage backend.

    Works with AWS S3, MinIO, LocalStack, and other S3-compatible services.
    """

    def __init__(
        self,
        bucket: str,
        endpoint_url: Optional[str] = None,
        region: str = "us-east-1",
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
    ):
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.region = region

        client_kwargs = {
            "service_name": "s3",
            "region_name": region,
            "config": Config(signature_version="s3v4"),
        }

        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url

        if access_key and secret_key:
            client_kwargs["aws_access_key_id"] = access_key
            client_kwargs["aws_secret_access_key"] = secret_key

        self.client = boto3.client(**client_kwargs)

        logger.info("S3 storage initialized for bucket %s", bucket)

    @property
    def _base_url(self) -> str:
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com"

    def write(self, path: str, content: bytes, content_type: Optional[str] = None) -> FileInfo:
        key = path.lstrip("/")

        extra_args = {}
        if content_type:
            extra_args["ContentType"] = content_type

        self.client.put_object(Bucket=self.bucket, Key=key, Body=content, **extra_args)

        logger.info("Stored object s3://%s/%s (%d bytes)", self.bucket, key, len(content))

        return FileInfo(
            path=path,
            size_bytes=len(content),
            content_type=content_type,
            last_modified=datetime.now(),
            url=self.public_url(path),
        )

    def exists(self, path: str) -> bool:
        key = path.lstrip("/")

        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] in ("404", "NoSuchKey"):
                return False
            raise

    def delete(self, path: str) -> bool:
        key = path.lstrip("/")

        if not self.exists(path):
            return False

        self.client.delete_object(Bucket=self.bucket, Key=key)
        logger.info("Deleted object s3://%s/%s", self.bucket, key)
        return True

    def public_url(self, path: str) -> str:
        return f"{self._base_url}/{quote(path.lstrip('/'))}"

    def path_from_url(self, url: str) -> Optional[str]:
        prefix = f"{self._base_url}/"
        if not url or not url.startswith(prefix):
            return None
        return unquote(url[len(prefix):])
