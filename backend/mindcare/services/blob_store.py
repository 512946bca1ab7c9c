"""
Local blob store for diary images served as static files.
"""
import logging
import os
import uuid
from typing import Optional

from mindcare.core.errors import StorageError

logger = logging.getLogger(__name__)


class LocalBlobStore:
    """Writes image bytes under ``upload_dir`` and hands back their public URL."""

    def __init__(self, upload_dir: str, base_url: str = ""):
        self.upload_dir = upload_dir
        self.base_url = base_url.rstrip("/")

    def get_file_url(self, file_path: str) -> str:
        """Convert a stored file path to its URL under /static."""
        filename = os.path.basename(file_path)
        return f"{self.base_url}/static/{filename}"

    def store(self, data: bytes, filename: Optional[str] = None) -> str:
        """Persist ``data`` under a unique name and return its public URL."""
        file_ext = os.path.splitext(filename)[1] if filename else ""
        unique_filename = f"{uuid.uuid4()}{file_ext or '.jpg'}"
        file_path = os.path.join(self.upload_dir, unique_filename)

        try:
            os.makedirs(self.upload_dir, exist_ok=True)
            with open(file_path, "wb") as buffer:
                buffer.write(data)
        except OSError as e:
            logger.error(f"Failed to store image {unique_filename}: {e}", exc_info=True)
            raise StorageError("Failed to store image") from e

        logger.debug(f"Stored image {unique_filename} ({len(data)} bytes)")
        return self.get_file_url(file_path)

    def delete(self, url: str) -> bool:
        """Remove a file previously returned by ``store``; False when it is already gone."""
        file_path = os.path.join(self.upload_dir, os.path.basename(url))
        try:
            os.remove(file_path)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Failed to remove image {file_path}: {e}")
            return False
        logger.debug(f"Removed image {os.path.basename(file_path)}")
        return True
