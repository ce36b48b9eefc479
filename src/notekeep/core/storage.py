"""
Image storage on the local filesystem.

Uploaded images are checked against the accepted content types and size,
written under ``upload_dir/<folder>/`` with a random name, and referred to by
their path relative to ``upload_dir`` (e.g. ``notes/5d41402a.png``).
"""

import uuid
from pathlib import Path
from typing import Iterable, Optional

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from ..config import Settings, get_settings
from .exceptions import UnsupportedMediaTypeError
from .logging import get_logger

logger = get_logger("storage")

NOTES_FOLDER = "notes"
PROFILES_FOLDER = "profiles"

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}


def is_upload(upload: Optional[UploadFile]) -> bool:
    """True when a file part was actually sent; browsers post an empty one for no file."""
    return upload is not None and bool(upload.filename)


class ImageStorage:
    """Writes and removes uploaded images below a root directory."""

    def __init__(self, root: Path, max_bytes: int, allowed_types: Iterable[str]):
        self.root = Path(root)
        self.max_bytes = max_bytes
        self.allowed_types = frozenset(allowed_types)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ImageStorage":
        settings = settings or get_settings()
        return cls(
            root=Path(settings.upload_dir),
            max_bytes=settings.max_image_size_bytes,
            allowed_types=settings.allowed_image_types,
        )

    async def save(self, upload: UploadFile, folder: str = NOTES_FOLDER) -> str:
        """Validate and store an upload, returning its reference."""
        content_type = (upload.content_type or "").lower()
        if content_type not in self.allowed_types:
            raise UnsupportedMediaTypeError()

        # one byte past the limit is enough to know it is too big
        data = await upload.read(self.max_bytes + 1)
        if len(data) > self.max_bytes:
            raise UnsupportedMediaTypeError(
                f"Image exceeds the {self.max_bytes // (1024 * 1024)} MB limit"
            )

        extension = _EXTENSIONS.get(content_type, Path(upload.filename or "").suffix.lower())
        ref = f"{folder}/{uuid.uuid4().hex}{extension}"
        target = self.root / ref

        await run_in_threadpool(self._write, target, data)
        logger.info("Stored image", extra={"ref": ref, "size": len(data)})
        return ref

    async def delete(self, ref: Optional[str]) -> bool:
        """Best-effort removal; failures are logged, never raised."""
        if not ref:
            return False

        path = self.resolve(ref)
        if path is None:
            logger.warning("Refusing to delete image outside upload root", extra={"ref": ref})
            return False

        try:
            await run_in_threadpool(path.unlink)
        except FileNotFoundError:
            logger.info("Image already gone", extra={"ref": ref})
            return False
        except OSError as e:
            logger.warning(f"Failed to delete image: {e}", extra={"ref": ref})
            return False

        logger.info("Deleted image", extra={"ref": ref})
        return True

    def resolve(self, ref: str) -> Optional[Path]:
        """Absolute path of a reference, or None if it escapes the root."""
        root = self.root.resolve()
        path = (root / ref).resolve()
        if path == root or root not in path.parents:
            return None
        return path

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
