"""
File storage collaborator over Django's default storage backend.
"""
import logging
import os

from django.conf import settings
from django.core.files.storage import default_storage

from core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class FileStorageService:
    """Validates and removes stored files"""

    def __init__(self, storage=None):
        self.storage = storage or default_storage

    def validate_image(self, upload):
        allowed = getattr(settings, 'ALLOWED_IMAGE_EXTENSIONS', ['jpg', 'jpeg', 'png', 'webp'])
        max_size = getattr(settings, 'MAX_UPLOAD_SIZE', 10 * 1024 * 1024)
        extension = os.path.splitext(upload.name)[1].lstrip('.').lower()
        if extension not in allowed:
            raise ValidationError(
                message=f"Unsupported file type '.{extension}'",
                details={'images': [f"Allowed types: {', '.join(allowed)}"]},
            )
        if upload.size > max_size:
            raise ValidationError(
                message="File too large",
                details={'images': [f"Maximum size is {max_size // (1024 * 1024)} MB"]},
            )

    def delete(self, name) -> bool:
        """Remove a stored file; missing files and backend errors are logged"""
        if not name:
            return False
        try:
            if self.storage.exists(name):
                self.storage.delete(name)
                logger.info(f"Deleted stored file {name}")
                return True
        except Exception as e:
            logger.error(f"Failed to delete stored file {name}: {e}", exc_info=True)
        return False

    def delete_many(self, names):
        return sum(1 for name in names if self.delete(name))
