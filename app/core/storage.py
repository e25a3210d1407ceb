"""
Local filesystem storage for uploaded application documents.

Files land in a single upload directory that is also served as static
content. Stored paths are recorded on the application row, so every
delete here goes through an existence check.
"""

import logging
import os
import uuid
from typing import Optional
from fastapi import Request

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "image/jpeg",
    "image/jpg",
    "image/png",
}
ALLOWED_EXTENSIONS = {".pdf", ".jpeg", ".jpg", ".png"}


class InvalidUploadError(ValueError):
    """Raised when an uploaded file fails type or size checks."""


def validate_upload(filename: Optional[str], content_type: Optional[str], size: int, max_size: int) -> None:
    """
    Reject anything that is not a PDF, JPG or PNG, or is larger than max_size.

    Both the MIME type and the extension have to match.
    """
    file_ext = os.path.splitext(filename or "")[1].lower()

    if content_type not in ALLOWED_CONTENT_TYPES or file_ext not in ALLOWED_EXTENSIONS:
        raise InvalidUploadError("Only PDF, JPG, and PNG files are allowed!")

    if size > max_size:
        raise InvalidUploadError(f"File exceeds the {max_size // (1024 * 1024)}MB size limit")


class LocalStorage:
    """Local filesystem storage backend"""

    def __init__(self, base_dir: str = "uploads"):
        self.base_dir = base_dir
        os.makedirs(self.base_dir, exist_ok=True)

    def upload_file(self, content: bytes, filename: str) -> str:
        """Write content under a unique name and return the stored path"""
        # basename() strips any directory components a client sends
        safe_name = os.path.basename(filename or "") or "upload"
        unique_filename = f"{uuid.uuid4().hex}-{safe_name}"
        file_path = os.path.join(self.base_dir, unique_filename)

        with open(file_path, "wb") as buffer:
            buffer.write(content)

        logger.info(f"Stored upload {safe_name} at {file_path} ({len(content)} bytes)")
        return file_path

    def delete_file(self, file_path: str) -> bool:
        """Delete a stored file. Returns False if it was already gone or could not be removed."""
        try:
            if self.file_exists(file_path):
                os.remove(file_path)
                logger.info(f"Deleted stored file {file_path}")
                return True
            return False
        except OSError as e:
            logger.warning(f"Error deleting file {file_path}: {e}")
            return False

    def file_exists(self, file_path: str) -> bool:
        return os.path.exists(file_path)

    def is_writable(self) -> bool:
        return os.path.isdir(self.base_dir) and os.access(self.base_dir, os.W_OK)


def get_storage(request: Request) -> LocalStorage:
    """Dependency returning the storage backend attached to the running app"""
    return request.app.state.storage
