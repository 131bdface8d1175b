"""Local filesystem storage backend."""

import logging
import mimetypes
from datetime import datetime
from pathlib import Path
from typing import Optional
from urllib.parse import quote, unquote

from bakery.storage.base import FileInfo, ObjectStorage

logger = logging.getLogger(__name__)


class LocalStorage(ObjectStorage):
    """
    Local filesystem storage backend.

    Stores objects in a base directory with the path structure preserved and
    serves them under ``public_base_url``.
    """

    def __init__(self, base_path: str | Path = "./uploads", public_base_url: str = "/uploads"):
        self.base_path = Path(base_path).resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.public_base_url = public_base_url.rstrip("/")
        logger.info("Local storage initialized at %s", self.base_path)

    def _resolve_path(self, path: str) -> Path:
        """Resolve a storage path to an absolute filesystem path."""
        clean_path = Path(path).as_posix().lstrip("/")
        full_path = self.base_path / clean_path

        # Keep every object inside base_path
        try:
            full_path.resolve().relative_to(self.base_path)
        except ValueError:
            raise ValueError(f"Invalid path: {path} (outside base directory)")

        return full_path

    def write(self, path: str, content: bytes, content_type: Optional[str] = None) -> FileInfo:
        full_path = self._resolve_path(path)
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_bytes(content)

        if content_type is None:
            content_type, _ = mimetypes.guess_type(path)

        logger.info("Stored object %s (%d bytes)", path, len(content))

        return FileInfo(
            path=path,
            size_bytes=len(content),
            content_type=content_type,
            last_modified=datetime.now(),
            url=self.public_url(path),
        )

    def exists(self, path: str) -> bool:
        return self._resolve_path(path).is_file()

    def delete(self, path: str) -> bool:
        full_path = self._resolve_path(path)
        if not full_path.is_file():
            return False
        full_path.unlink()
        logger.info("Deleted object %s", path)
        return True

    def public_url(self, path: str) -> str:
        return f"{self.public_base_url}/{quote(path.lstrip('/'))}"

    def path_from_url(self, url: str) -> Optional[str]:
        prefix = f"{self.public_base_url}/"
        if not url or not url.startswith(prefix):
            return None
        return unquote(url[len(prefix):])
