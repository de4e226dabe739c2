import logging
import mimetypes
import os
import random
import time
from pathlib import Path
from typing import Optional

from app.services.storage.errors import LocalStorageError

logger = logging.getLogger(__name__)

LOCAL_URL_PREFIX = "/uploads"


def generate_filename(
    prefix: str, original_name: Optional[str], content_type: Optional[str] = None
) -> str:
    """``<prefix>-<millis>-<random>.<ext>``; unique across concurrent requests without a counter.

    The extension comes from the original name, or from the MIME type when the
    name has none, so the file is served with the right content type.
    """
    extension = os.path.splitext(original_name or "")[1].lower()
    if not extension and content_type:
        extension = mimetypes.guess_extension(content_type.split(";")[0].strip().lower()) or ""
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{prefix}-{unique_suffix}{extension}"


class LocalDiskStorage:
    """Files under a single uploads root, addressed by ``/uploads/<dir>/<name>``."""

    def __init__(self, root, url_prefix: str = LOCAL_URL_PREFIX):
        self.root = Path(root).resolve()
        self.url_prefix = url_prefix.rstrip("/")

    def owns(self, ref: Optional[str]) -> bool:
        return bool(ref) and ref.startswith(f"{self.url_prefix}/")

    def _inside_root(self, path: Path) -> bool:
        return path != self.root and self.root in path.parents

    def write(self, data: bytes, directory: str, generated_name: str) -> str:
        target_dir = (self.root / directory).resolve()
        target = (target_dir / generated_name).resolve()
        if not self._inside_root(target):
            raise LocalStorageError(f"Refusing to write outside the uploads directory: {directory}/{generated_name}")

        try:
            # exist_ok: concurrent first uploads race on creating the directory
            target_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            logger.error(f"❌ Failed to write {target}: {str(e)}")
            raise LocalStorageError(f"Failed to save file: {str(e)}") from e

        relative = target.relative_to(self.root).as_posix()
        logger.info(f"✅ Saved local file: {relative} ({len(data)} bytes)")
        return f"{self.url_prefix}/{relative}"

    def resolve(self, ref: Optional[str]) -> Optional[Path]:
        """Filesystem path for a local reference, or None if it points outside the root."""
        if not self.owns(ref):
            return None
        relative = ref.split("?")[0][len(self.url_prefix) + 1:]
        if not relative or "\x00" in relative:
            return None
        try:
            candidate = (self.root / relative).resolve()
        except (OSError, ValueError, RuntimeError) as e:
            logger.warning(f"Could not resolve local reference {ref}: {str(e)}")
            return None
        if not self._inside_root(candidate):
            return None
        return candidate

    def delete(self, ref: str) -> None:
        path = self.resolve(ref)
        if path is None:
            logger.warning(f"Refusing to delete path outside the uploads directory: {ref}")
            return
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise LocalStorageError(f"Failed to delete {ref}: {str(e)}") from e
        logger.info(f"🗑️ Deleted local file: {path}")
