"""Image Store: validates, writes and discards uploaded invitation images.

Invariants:
    - Extension AND MIME type must both be jpeg/jpg/png/webp, else nothing is written
    - Files are streamed in chunks; passing max_bytes aborts and removes the partial file
    - Stored names are <epoch-millis>-<9-digit random><ext>; client filenames are never used
    - discard() only deletes URLs under url_prefix that resolve directly inside the directory
    - Missing files and OS errors during discard are logged, never raised

Design Decisions:
    - File writes are not coupled to database commits; a crash between the two
      can leave an orphaned file (accepted, see callers in api/routes/invitations.py)
"""

import logging
import os
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from gallery.core.errors import UploadRejectedError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1MB

ALLOWED_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".webp"})
ALLOWED_MIME_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})


class ImageStore:
    """Managed upload directory exposed under a public URL prefix."""

    def __init__(self, directory: str | Path, url_prefix: str, max_bytes: int):
        self.directory = Path(directory)
        self.url_prefix = url_prefix if url_prefix.endswith("/") else url_prefix + "/"
        self.max_bytes = max_bytes

    def ensure_directory(self) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    def validate(self, file: UploadFile) -> str:
        """Return the normalized extension, or raise UploadRejectedError."""
        ext = os.path.splitext(file.filename or "")[1].lower()
        ctype = (file.content_type or "").split(";")[0].strip().lower()
        if ext not in ALLOWED_EXTENSIONS or ctype not in ALLOWED_MIME_TYPES:
            raise UploadRejectedError("Only image files are allowed")
        return ext

    async def save(self, file: UploadFile) -> str:
        """Validate and write the upload; return its public URL."""
        ext = self.validate(file)
        name = _generate_name(ext)
        dst = self.ensure_directory() / name
        await self._write_streamed(file, dst)
        logger.info("Stored uploaded image", extra={"image_url": self.url_prefix + name})
        return self.url_prefix + name

    def is_managed(self, image_url: str | None) -> bool:
        return bool(image_url) and image_url.startswith(self.url_prefix)

    def path_for(self, image_url: str) -> Path | None:
        """Filesystem path of a managed URL, or None when it escapes the directory."""
        if not self.is_managed(image_url):
            return None
        name = image_url[len(self.url_prefix):]
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            return None
        path = (self.directory / name).resolve()
        if path.parent != self.directory.resolve():
            return None
        return path

    def discard(self, image_url: str | None) -> bool:
        """Best-effort delete of a managed image. Returns True if a file was removed."""
        path = self.path_for(image_url) if image_url else None
        if path is None:
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(
                f"Could not delete image file: {e}", extra={"image_url": image_url},
            )
            return False
        logger.info("Deleted image file", extra={"image_url": image_url})
        return True

    async def _write_streamed(self, file: UploadFile, dst: Path) -> None:
        total = 0
        try:
            with dst.open("wb") as f:
                while True:
                    chunk = await file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    total += len(chunk)
                    if total > self.max_bytes:
                        raise UploadRejectedError(
                            f"File too large (max {self.max_bytes} bytes)",
                        )
                    f.write(chunk)
        except Exception:
            dst.unlink(missing_ok=True)
            raise
        finally:
            await file.close()


def _generate_name(ext: str) -> str:
    millis = int(time.time() * 1000)
    return f"{millis}-{secrets.randbelow(10**9):09d}{ext}"
