class StorageError(Exception):
    """Base class for attachment storage failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FileValidationError(StorageError):
    """The uploaded file is missing or has a MIME type the endpoint does not accept."""

    status_code = 400


class FileSizeLimitError(StorageError):
    status_code = 400

    def __init__(self, max_size_mb: int):
        super().__init__(f"File too large. Maximum size is {max_size_mb}MB.")
        self.max_size_mb = max_size_mb


class RemoteStorageError(StorageError):
    """Cloudinary upload or destroy call failed."""


class LocalStorageError(StorageError):
    """Writing to or deleting from the uploads directory failed."""
