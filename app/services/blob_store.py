# app/services/blob_store.py
"""
Firmware binary storage on the local filesystem.

Blobs are immutable files named by 128 random bits plus the ``.bin`` extension.
The store never reuses a name, so concurrent writers never touch the same path.
"""
import hashlib
import logging
import os
import re
import secrets
from dataclasses import dataclass
from typing import Optional

from app.core.exceptions import BlobStorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSION = ".bin"
DEFAULT_MAX_SIZE = 10 * 1024 * 1024  # 10MB

_BLOB_NAME_RE = re.compile(r"^[0-9a-f]{32}\.bin$")


@dataclass(frozen=True)
class StoredBlob:
    """A blob that has been written to disk."""
    name: str
    size: int
    checksum: str


class BlobStore:
    """Create, delete and look up firmware binaries under one directory."""

    def __init__(self, root: str, max_size: int = DEFAULT_MAX_SIZE):
        self.root = root
        self.max_size = max_size
        self._ensure_root()

    def _ensure_root(self):
        try:
            os.makedirs(self.root, exist_ok=True)
        except OSError as e:
            raise BlobStorageError(f"Cannot create firmware directory {self.root}: {e}") from e

    def path(self, name: str) -> str:
        """Absolute path of a blob. Rejects anything that is not a store-issued name."""
        if not _BLOB_NAME_RE.match(name or ""):
            raise ValidationError(f"Invalid firmware file name: {name!r}")
        return os.path.join(self.root, name)

    def validate(self, original_filename: Optional[str], size: int):
        """Check extension and size before any bytes are written."""
        extension = os.path.splitext(original_filename or "")[1].lower()
        if extension != ALLOWED_EXTENSION:
            raise ValidationError("Only .bin files are allowed")
        if size <= 0:
            raise ValidationError("No file uploaded")
        if size > self.max_size:
            raise ValidationError(
                f"Firmware file is {size} bytes, limit is {self.max_size} bytes"
            )

    def put(self, content: bytes, original_filename: Optional[str]) -> StoredBlob:
        """Write ``content`` under a fresh random name and return what was stored."""
        self.validate(original_filename, len(content))

        name = f"{secrets.token_hex(16)}{ALLOWED_EXTENSION}"
        file_path = self.path(name)

        try:
            # "xb" fails instead of overwriting if the name were ever reused
            with open(file_path, "xb") as f:
                f.write(content)
        except OSError as e:
            # Don't leave a truncated file behind
            self._remove_quietly(file_path)
            raise BlobStorageError(f"Failed to write firmware file: {e}") from e

        checksum = hashlib.sha256(content).hexdigest()
        logger.debug("Stored blob %s (%d bytes)", name, len(content))
        return StoredBlob(name=name, size=len(content), checksum=checksum)

    def delete(self, name: str) -> bool:
        """
        Remove a blob. A blob that is already gone is not an error.

        Returns True if a file was removed, False if there was nothing to remove.
        Raises BlobStorageError if the file exists but could not be removed.
        """
        file_path = self.path(name)
        try:
            os.remove(file_path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise BlobStorageError(f"Failed to delete firmware file {name}: {e}") from e
        logger.debug("Deleted blob %s", name)
        return True

    def exists(self, name: str) -> bool:
        try:
            return os.path.isfile(self.path(name))
        except ValidationError:
            return False

    @staticmethod
    def _remove_quietly(file_path: str):
        try:
            os.remove(file_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove partial blob %s: %s", file_path, e)
