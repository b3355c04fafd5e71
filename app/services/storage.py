"""Artwork image storage on local disk."""

import logging
import os
import uuid
from pathlib import Path

from fastapi import UploadFile

from app.config import Settings, get_settings
from app.exceptions import ValidationError

logger = logging.getLogger("atelier")

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp"}
MAX_IMAGES_PER_ARTWORK = 10


class ImageStorage:
    """Stores uploaded artwork images under UPLOAD_DIR/artworks and deletes them by filename."""

    def __init__(self, settings: Settings) -> None:
        self.directory = Path(settings.UPLOAD_DIR) / "artworks"
        self.max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
        self.max_size_mb = settings.MAX_UPLOAD_SIZE_MB

    def validate_upload_metadata(self, filename: str, content_type: str | None) -> None:
        """Reject files that are not images by extension or declared MIME type."""
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(f"Unsupported file type '{ext}'. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}")
        if content_type and not content_type.startswith("image/"):
            raise ValidationError(f"Invalid content type '{content_type}'. Must be an image.")

    async def store(self, upload: UploadFile, field: str) -> str:
        """Stream an upload to disk and return the stored filename.

        Raises ValidationError for non-images or files over MAX_UPLOAD_SIZE_MB.
        """
        self.validate_upload_metadata(upload.filename or "", upload.content_type)

        ext = Path(upload.filename or "image.bin").suffix.lower()
        stored_filename = f"{field}-{uuid.uuid4()}{ext}"
        self.directory.mkdir(parents=True, exist_ok=True)

        file_path = self.directory / stored_filename
        file_size = 0
        chunk_size = 1024 * 64

        try:
            with open(file_path, "wb") as f:
                while True:
                    chunk = await upload.read(chunk_size)
                    if not chunk:
                        break
                    file_size += len(chunk)
                    if file_size > self.max_bytes:
                        raise ValidationError(f"File too large. Maximum: {self.max_size_mb}MB")
                    f.write(chunk)
        except ValidationError:
            if file_path.exists():
                os.remove(file_path)
            raise

        return stored_filename

    def delete(self, filename: str) -> None:
        """Remove a stored file. Missing files are ignored."""
        # Stored names never contain path separators; refuse anything that would escape the directory.
        file_path = self.directory / Path(filename).name
        if file_path.exists():
            os.remove(file_path)
        else:
            logger.debug("Stored file %s already gone", filename)

    def delete_many(self, filenames: list[str]) -> None:
        for filename in filenames:
            self.delete(filename)


_image_storage: ImageStorage | None = None


def get_image_storage() -> ImageStorage:
    """Get singleton image storage instance."""
    global _image_storage
    if _image_storage is None:
        _image_storage = ImageStorage(get_settings())
    return _image_storage
