from .errors import (
    FileSizeLimitError,
    FileValidationError,
    LocalStorageError,
    RemoteStorageError,
    StorageError,
)
from .selector import FileCategory, StorageMode, StorageTarget, categorize, select_backend
from .cloudinary_service import CloudinaryMediaService, MediaUploadResult, is_cloudinary_url
from .local import LocalDiskStorage, generate_filename
from .uploads import AttachmentStorage, StoredFile, UploadPolicy, format_file_size

__all__ = [
    "AttachmentStorage",
    "CloudinaryMediaService",
    "FileCategory",
    "FileSizeLimitError",
    "FileValidationError",
    "LocalDiskStorage",
    "LocalStorageError",
    "MediaUploadResult",
    "RemoteStorageError",
    "StorageError",
    "StorageMode",
    "StorageTarget",
    "StoredFile",
    "UploadPolicy",
    "categorize",
    "format_file_size",
    "generate_filename",
    "is_cloudinary_url",
    "select_backend",
]
