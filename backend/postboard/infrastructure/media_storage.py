"""Media Storage: stores uploaded post images on disk and releases replaced ones.

Invariants:
    - Only image/png, image/jpg and image/jpeg are stored; anything else yields None
    - Stored names are uuid4 + extension from the media subtype; returned paths
      are relative to media_root and always use forward slashes
    - clear() is idempotent: a missing file is not an error
    - clear() never deletes outside the images directory
    - clear() never raises; failures are logged and reported as False
    - locate() only returns files inside the images directory

Design Decisions:
    - aiofiles for writes and deletes: disk IO stays off the event loop
    - Chunked copy from the upload: large images are not held in memory twice
"""

import logging
import uuid
from pathlib import Path

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from postboard.config import get_settings
from postboard.core.domain_types import IMAGE_EXTENSIONS

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class MediaStorage:
    """Image files under <root>/<images_dir>."""

    def __init__(self, root: Path | str, images_dir: str = "images"):
        self.root = Path(root)
        self.images_dir = images_dir

    @property
    def directory(self) -> Path:
        return self.root / self.images_dir

    def accepts(self, content_type: str | None) -> bool:
        return content_type in IMAGE_EXTENSIONS

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    async def save(self, upload: UploadFile | None) -> str | None:
        """Store an accepted upload. Returns its public path or None."""
        if upload is None or not self.accepts(upload.content_type):
            if upload is not None:
                logger.info(
                    f"Rejected upload with media type {upload.content_type!r}",
                )
            return None

        self.ensure_directory()
        filename = f"{uuid.uuid4()}{IMAGE_EXTENSIONS[upload.content_type]}"
        async with aiofiles.open(self.directory / filename, "wb") as out:
            while chunk := await upload.read(CHUNK_SIZE):
                await out.write(chunk)

        stored = Path(self.images_dir) / filename
        return stored.as_posix()

    async def clear(self, path: str | None) -> bool:
        """Delete a previously stored image. True if a file was removed."""
        if not path:
            return False
        target = self._resolve(path)
        if target is None:
            logger.warning(f"Refused to clear image outside media directory: {path}")
            return False
        try:
            await aiofiles.os.remove(target)
        except FileNotFoundError:
            logger.debug(f"Image already gone: {path}")
            return False
        except OSError as e:
            logger.warning(f"Failed to clear image {path}: {e}")
            return False
        logger.info(f"Cleared image {path}")
        return True

    def locate(self, filename: str) -> Path | None:
        """Stored image file for a public filename, or None."""
        target = self._resolve(f"{self.images_dir}/{filename}")
        if target is None or not target.is_file():
            return None
        return target

    def _resolve(self, path: str) -> Path | None:
        relative = path.replace("\\", "/").lstrip("/")
        target = (self.root / relative).resolve()
        directory = self.directory.resolve()
        if directory not in target.parents:
            return None
        return target


def get_media_storage() -> MediaStorage:
    """FastAPI dependency: media storage configured from settings."""
    settings = get_settings()
    return MediaStorage(settings.media_root, settings.images_dir)
