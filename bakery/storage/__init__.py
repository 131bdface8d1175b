"""Object storage backends for product and site images."""

from bakery.storage.base import FileInfo, ObjectStorage
from bakery.storage.local import LocalStorage

__all__ = ["FileInfo", "ObjectStorage", "LocalStorage", "create_storage"]


def create_storage(settings) -> ObjectStorage:
    """Build the storage backend selected by ``settings.STORAGE_BACKEND``."""
    if settings.STORAGE_BACKEND == "s3":
        from bakery.storage.s3 import S3Storage

        if not settings.S3_BUCKET:
            raise ValueError("S3_BUCKET must be set when STORAGE_BACKEND is 's3'")
        return S3Storage(
            bucket=settings.S3_BUCKET,
            endpoint_url=settings.S3_ENDPOINT_URL,
            region=settings.S3_REGION,
            access_key=settings.S3_ACCESS_KEY,
            secret_key=settings.S3_SECRET_KEY,
        )
    if settings.STORAGE_BACKEND == "local":
        return LocalStorage(settings.STORAGE_LOCAL_PATH, settings.STORAGE_PUBLIC_BASE_URL)
    raise ValueError(f"Unsupported STORAGE_BACKEND: {settings.STORAGE_BACKEND}")
