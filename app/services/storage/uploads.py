import logging
from dataclasses import dataclass
from typing import Optional

from app.services.storage.cloudinary_service import CloudinaryMediaService, is_cloudinary_url
from app.services.storage.errors import (
    FileSizeLimitError,
    FileValidationError,
    RemoteStorageError,
    StorageError,
)
from app.services.storage.local import LocalDiskStorage, generate_filename
from app.services.storage.selector import (
    FileCategory,
    StorageMode,
    StorageTarget,
    categorize,
    select_backend,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadPolicy:
    max_size_mb: int
    allow_pdf: bool = True

    @property
    def max_bytes(self) -> int:
        return self.max_size_mb * 1024 * 1024


@dataclass
class StoredFile:
    ref: str
    category: FileCategory
    original_name: str
    size: int
    content_type: str
    target: StorageTarget

    @property
    def display_size(self) -> str:
        return format_file_size(self.size)


def format_file_size(num_bytes: int) -> str:
    if not num_bytes:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(num_bytes)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


def _read_upload(upload) -> bytes:
    upload.file.seek(0)
    return upload.file.read()


class AttachmentStorage:
    """Validates uploads and routes them to local disk or Cloudinary.

    Built once at startup from settings; endpoints only see ``validate``,
    ``store`` and ``remove``.
    """

    def __init__(
        self,
        local: LocalDiskStorage,
        media: Optional[CloudinaryMediaService] = None,
        mode: StorageMode = StorageMode.HYBRID,
        ephemeral_filesystem: bool = False,
        remote_root_folder: str = "ganu",
    ):
        self.local = local
        self.media = media
        self.mode = StorageMode(mode)
        self.ephemeral_filesystem = ephemeral_filesystem
        self.remote_root_folder = remote_root_folder.strip("/")

    @classmethod
    def from_settings(cls, settings, uploader=None) -> "AttachmentStorage":
        media = CloudinaryMediaService(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            uploader=uploader,
        )
        return cls(
            local=LocalDiskStorage(settings.UPLOADS_DIR),
            media=media,
            mode=StorageMode(settings.STORAGE_MODE.lower()),
            ephemeral_filesystem=settings.is_ephemeral_filesystem,
            remote_root_folder=settings.CLOUDINARY_ROOT_FOLDER,
        )

    def target_for(self, category: FileCategory) -> StorageTarget:
        return select_backend(self.mode, self.ephemeral_filesystem, category)

    def validate(self, upload, policy: UploadPolicy, size: Optional[int] = None) -> FileCategory:
        if upload is None:
            raise FileValidationError("No file uploaded")

        category = categorize(upload.content_type)
        if category is None or (category == FileCategory.PDF and not policy.allow_pdf):
            allowed = "image and PDF files" if policy.allow_pdf else "image files"
            raise FileValidationError(f"Only {allowed} are allowed!")

        size = upload.size if size is None else size
        if size is not None and size > policy.max_bytes:
            raise FileSizeLimitError(policy.max_size_mb)
        return category

    def store(self, upload, namespace: str, policy: UploadPolicy) -> StoredFile:
        category = self.validate(upload, policy)
        data = _read_upload(upload)
        # The declared size can be missing or wrong, check what was actually sent
        self.validate(upload, policy, size=len(data))

        original_name = upload.filename or f"{namespace}-upload"
        target = self.target_for(category)

        if target == StorageTarget.REMOTE:
            if self.media is None:
                raise RemoteStorageError("Remote media storage is not configured.")
            result = self.media.upload(
                data,
                folder=f"{self.remote_root_folder}/{namespace}",
                desired_name=original_name,
                resource_type="image" if category == FileCategory.IMAGE else "raw",
            )
            ref = result.url
        else:
            prefix = namespace[:-1] if namespace.endswith("s") else namespace
            generated_name = generate_filename(prefix, original_name, upload.content_type)
            ref = self.local.write(data, namespace, generated_name)

        logger.info(f"Stored {category.value} '{original_name}' in {target.value} storage: {ref}")
        return StoredFile(
            ref=ref,
            category=category,
            original_name=original_name,
            size=len(data),
            content_type=upload.content_type,
            target=target,
        )

    def remove(self, ref: Optional[str]) -> None:
        """Best-effort delete. Never raises: cleanup must not block the request."""
        if not ref:
            return
        try:
            if is_cloudinary_url(ref):
                if self.media is None:
                    logger.warning(f"Cannot delete {ref}: remote media storage is not configured")
                    return
                self.media.destroy(ref)
            elif self.local.owns(ref):
                self.local.delete(ref)
            else:
                logger.warning(f"Unrecognised attachment reference, nothing deleted: {ref}")
        except StorageError as e:
            logger.error(f"❌ Error deleting file {ref}: {e.message}")

    def resolve_local(self, ref: str):
        return self.local.resolve(ref)
