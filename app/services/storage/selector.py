import enum
from typing import Optional


class StorageMode(str, enum.Enum):
    HYBRID = "hybrid"
    LOCAL = "local"
    REMOTE = "remote"


class StorageTarget(str, enum.Enum):
    LOCAL = "local"
    REMOTE = "remote"


class FileCategory(str, enum.Enum):
    IMAGE = "image"
    PDF = "pdf"


PDF_CONTENT_TYPE = "application/pdf"


def categorize(content_type: Optional[str]) -> Optional[FileCategory]:
    """Map a MIME type to the attachment category, or None if unsupported."""
    content_type = (content_type or "").lower().strip()
    if content_type.startswith("image/"):
        return FileCategory.IMAGE
    if content_type == PDF_CONTENT_TYPE:
        return FileCategory.PDF
    return None


def select_backend(
    mode: StorageMode, ephemeral_filesystem: bool, category: FileCategory
) -> StorageTarget:
    """Pick where a file of ``category`` is stored.

    Hybrid mode always sends images to the media service. PDFs only go there
    when the host has no durable disk (e.g. Vercel), otherwise they stay local.
    """
    mode = StorageMode(mode)
    if mode == StorageMode.LOCAL:
        return StorageTarget.LOCAL
    if mode == StorageMode.REMOTE:
        return StorageTarget.REMOTE

    if category == FileCategory.IMAGE:
        return StorageTarget.REMOTE
    return StorageTarget.REMOTE if ephemeral_filesystem else StorageTarget.LOCAL
