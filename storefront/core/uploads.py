"""Flat on-disk storage for uploaded images."""

import logging
import os
import random
import time
from typing import BinaryIO, List, Optional

from storefront.core.errors import AssetCleanupFailure, ValidationError

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads/"


class UploadStorage:
    """Saves and removes files directly under a single upload root."""

    def __init__(self, root: str, max_file_size: int = 5 * 1024 * 1024, allowed_types: Optional[List[str]] = None):
        self.root = os.path.abspath(root)
        self.max_file_size = max_file_size
        self.allowed_types = allowed_types or ["jpeg", "jpg", "png", "gif", "webp"]

    def ensure_root(self) -> None:
        """Create the upload directory if it does not exist."""
        os.makedirs(self.root, exist_ok=True)

    def is_allowed_image(self, filename: str, content_type: Optional[str]) -> bool:
        """Both the extension and the MIME subtype must be on the allow-list."""
        extension = os.path.splitext(filename or "")[1].lower().lstrip(".")
        subtype = (content_type or "").lower().split("/")[-1]
        return extension in self.allowed_types and subtype in self.allowed_types

    @staticmethod
    def generate_filename(fieldname: str, original_name: str) -> str:
        """Build ``<fieldname>-<epoch-millis>-<random><.ext>``."""
        extension = os.path.splitext(original_name or "")[1].lower()
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        return f"{fieldname}-{unique_suffix}{extension}"

    def save_image(self, fieldname: str, original_name: str, content_type: Optional[str], stream: BinaryIO) -> str:
        """
        Validate and store an uploaded image.

        Returns the generated filename. Raises ValidationError when the file
        is not an allowed image or exceeds the size limit.
        """
        if not self.is_allowed_image(original_name, content_type):
            raise ValidationError("Only image files are allowed")

        content = stream.read(self.max_file_size + 1)
        if len(content) > self.max_file_size:
            raise ValidationError("File too large")

        self.ensure_root()
        filename = self.generate_filename(fieldname, original_name)
        with open(os.path.join(self.root, filename), "wb") as f:
            f.write(content)
        logger.info(f"Stored upload {filename} ({len(content)} bytes)")
        return filename

    @staticmethod
    def public_url(filename: str) -> str:
        """Root-relative URL under which a stored file is served."""
        return f"{PUBLIC_PREFIX}{filename}"

    def delete_if_exists(self, relative_path: str) -> None:
        """
        Best-effort removal of a file under the upload root.

        A missing file counts as success. Any other failure is logged and
        swallowed so the caller's workflow is never aborted by it.
        """
        try:
            self._remove(relative_path)
        except AssetCleanupFailure as e:
            logger.error(f"Error deleting stale upload: {e}")

    def _remove(self, relative_path: str) -> None:
        path = os.path.abspath(os.path.join(self.root, relative_path))
        if path == self.root or os.path.commonpath([self.root, path]) != self.root:
            logger.warning(f"Skipping deletion outside upload directory: {relative_path!r}")
            return
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.debug(f"Upload already gone: {path}")
            return
        except (OSError, ValueError) as e:
            raise AssetCleanupFailure(path, str(e)) from e
        logger.info(f"Deleted stale upload {path}")
