"""Base object storage interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class FileInfo:
    """Information about a stored object."""

    path: str
    size_bytes: int
    content_type: Optional[str]
    last_modified: Optional[datetime]
    url: Optional[str] = None


class ObjectStorage(ABC):
    """Abstract base class for object storage backends."""

    @abstractmethod
    def write(self, path: str, content: bytes, content_type: Optional[str] = None) -> FileInfo:
        """
        Write content to storage.

        Args:
            path: Object path (e.g., "products/1700000000000-bolo.jpg")
            content: Object content
            content_type: Optional MIME type

        Returns:
            FileInfo with details about the stored object
        """
        ...

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if an object exists."""
        ...

    @abstractmethod
    def delete(self, path: str) -> bool:
        """
        Delete an object.

        Returns:
            True if deleted, False if it didn't exist
        """
        ...

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Public URL under which the object is served."""
        ...

    @abstractmethod
    def path_from_url(self, url: str) -> Optional[str]:
        """
        Map a public URL back to its object path.

        Returns:
            The object path, or None when the URL does not belong to this storage
        """
        ...

    def delete_by_url(self, url: str) -> bool:
        """Delete the object behind a public URL; foreign URLs are skipped."""
        path = self.path_from_url(url)
        if path is None:
            return False
        return self.delete(path)
