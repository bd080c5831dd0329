import logging
import mimetypes
import os
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

from catalog_admin.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

IMAGE_URL_PREFIX = "/api/admin/products/images/"
DEFAULT_MEDIA_TYPE = "application/octet-stream"

_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


class StorageError(Exception):
    """Raised when an image file cannot be written or removed."""
    pass


class ImageNotFoundError(Exception):
    """Raised when a requested image file does not exist."""
    pass


@dataclass(frozen=True)
class ImageUpload:
    """Uploaded image content together with the client-supplied filename."""
    content: bytes
    filename: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.content


class LocalImageStorage:
    """
    Filesystem storage for product images.

    Files live flat inside a single upload directory under generated,
    collision-free names. Only the trailing segment of any filename handed in
    is used, so callers cannot reach outside the directory.
    """

    def __init__(self, root: Union[str, Path] = None):
        self.root = Path(root or settings.UPLOAD_DIR)

    def store(self, upload: ImageUpload) -> str:
        """
        Persist an uploaded image under a newly generated filename.

        Args:
            upload: Image bytes and original filename

        Returns:
            The generated filename

        Raises:
            StorageError: If the upload is empty or the write fails
        """
        if upload.is_empty:
            raise StorageError("Cannot store an empty file")

        filename = f"{uuid.uuid4().hex}{self._safe_extension(upload.filename)}"
        target = self.root / filename
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            # Exclusive create: never overwrite an existing file
            with open(target, "xb") as fh:
                fh.write(upload.content)
        except OSError as e:
            logger.error(f"Failed to store image {filename}: {e}")
            raise StorageError(f"Failed to store file {upload.filename or filename}: {e}") from e

        logger.info(f"Stored image {filename} ({len(upload.content)} bytes)")
        return filename

    def load(self, filename: str) -> Path:
        """
        Resolve a filename to a readable file.

        Raises:
            ImageNotFoundError: If no such file is stored
        """
        path = self._resolve(filename)
        if path is None or not path.is_file():
            raise ImageNotFoundError(f"Image {filename} not found")
        return path

    def delete(self, filename: str) -> bool:
        """
        Delete a stored file.

        Returns:
            True if a file was removed, False if it was already absent

        Raises:
            StorageError: On any other I/O failure
        """
        path = self._resolve(filename)
        if path is None:
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete file {filename}: {e}") from e

        logger.info(f"Deleted image {path.name}")
        return True

    def list_all(self) -> Iterator[str]:
        """Lazily yield the names of all stored files (unordered)."""
        if not self.root.is_dir():
            return
        with os.scandir(self.root) as entries:
            for entry in entries:
                if entry.is_file():
                    yield entry.name

    def probe_media_type(self, filename: str) -> str:
        """Guess the MIME type from the file extension."""
        media_type, _ = mimetypes.guess_type(filename)
        return media_type or DEFAULT_MEDIA_TYPE

    def is_available(self) -> bool:
        """Check the upload directory exists (or can be created) and is writable."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return os.access(self.root, os.W_OK)

    @staticmethod
    def public_url(filename: str) -> str:
        """URL under which the image endpoint serves a stored file."""
        return f"{IMAGE_URL_PREFIX}{filename}"

    @staticmethod
    def extract_filename_from_reference(reference: Optional[str]) -> Optional[str]:
        """
        Return the last path segment of an image reference.

        Works for bare filenames, relative paths, absolute URLs and Windows
        paths. Returns None when nothing usable is left.
        """
        if not reference or not reference.strip():
            return None
        value = reference.strip().split("?", 1)[0].split("#", 1)[0]
        name = re.split(r"[/\\]", value)[-1]
        return name or None

    def _resolve(self, filename: str) -> Optional[Path]:
        # Stored names are taken literally: only the trailing path segment is used
        name = re.split(r"[/\\]", (filename or "").strip())[-1]
        if not name or name in (".", ".."):
            return None
        return self.root / name

    @staticmethod
    def _safe_extension(original_name: Optional[str]) -> str:
        ext = os.path.splitext(original_name or "")[1]
        if _EXTENSION_RE.match(ext):
            return ext.lower()
        return ""


# Singleton storage instance
image_storage = LocalImageStorage()


def get_storage() -> LocalImageStorage:
    """Dependency returning the configured image storage."""
    return image_storage
