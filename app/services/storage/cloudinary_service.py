import io
import logging
import re
import time
from dataclasses import dataclass
from typing import Optional, Tuple

import cloudinary.uploader

from app.services.storage.errors import RemoteStorageError

logger = logging.getLogger(__name__)

CLOUDINARY_URL_MARKER = "cloudinary.com"
MAX_PUBLIC_NAME_LENGTH = 100

_VERSION_SEGMENT = re.compile(r"^v\d+$")


@dataclass
class MediaUploadResult:
    url: str
    public_id: str
    resource_type: str


def is_cloudinary_url(url: Optional[str]) -> bool:
    return bool(url) and CLOUDINARY_URL_MARKER in url


def sanitize_public_name(name: Optional[str], max_length: int = MAX_PUBLIC_NAME_LENGTH) -> str:
    """Turn an uploaded filename into a safe Cloudinary public id fragment."""
    base = (name or "").replace("\\", "/").split("/")[-1]
    base = re.sub(r"\.[^/.]+$", "", base)
    base = re.sub(r"[^a-zA-Z0-9_-]", "_", base)[:max_length]
    return base or "file"


class CloudinaryMediaService:
    """Upload/destroy wrapper around the Cloudinary SDK.

    Credentials are passed to every call instead of going through the global
    ``cloudinary.config``, so each instance is self-contained and the
    ``uploader`` can be swapped for a fake in tests.
    """

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        uploader=None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.uploader = uploader or cloudinary.uploader

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def _credentials(self) -> dict:
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
        }

    def upload(
        self,
        data: bytes,
        folder: str,
        desired_name: str,
        resource_type: str = "image",
    ) -> MediaUploadResult:
        if not self.configured:
            raise RemoteStorageError("Cloudinary is not configured.")

        public_name = f"{sanitize_public_name(desired_name)}_{int(time.time() * 1000)}"

        options = {
            "folder": folder,
            "resource_type": resource_type,
            "overwrite": False,
            **self._credentials(),
        }
        if resource_type == "raw":
            # Raw public ids keep their extension
            options["public_id"] = f"{public_name}.pdf"
            options["access_mode"] = "public"
        else:
            options["public_id"] = public_name
            options["transformation"] = [{"quality": "auto"}]

        file_obj = io.BytesIO(data)
        file_obj.name = desired_name or public_name

        try:
            result = self.uploader.upload(file_obj, **options)
        except Exception as e:
            logger.error(f"❌ Cloudinary upload failed for {desired_name}: {str(e)}")
            raise RemoteStorageError(f"Upload to media storage failed: {str(e)}") from e

        url = result.get("secure_url") or result.get("url")
        if not url or not result.get("public_id"):
            raise RemoteStorageError("Media storage did not return a URL for the upload.")

        if resource_type == "raw":
            url = self.normalize_raw_url(url)

        logger.info(f"✅ Uploaded to Cloudinary: {result['public_id']} ({resource_type})")
        return MediaUploadResult(url=url, public_id=result["public_id"], resource_type=resource_type)

    @staticmethod
    def normalize_raw_url(url: str) -> str:
        """Raw documents are served from a URL that ends in ``.pdf`` with no query."""
        clean_url = url.split("?")[0]
        if not clean_url.lower().endswith(".pdf"):
            clean_url = f"{clean_url}.pdf"
        return clean_url

    @staticmethod
    def parse_public_id(url: Optional[str]) -> Optional[Tuple[str, str]]:
        """Derive ``(public_id, resource_type)`` from a delivery URL.

        Returns None when the URL does not look like a Cloudinary delivery URL.
        Raw resources keep their extension in the public id; images do not.
        """
        if not is_cloudinary_url(url):
            return None

        clean_url = url.split("?")[0]
        parts = clean_url.split("/")
        if "upload" not in parts:
            return None
        upload_index = parts.index("upload")

        resource_type = "raw" if "/raw/" in clean_url else "image"

        remainder = parts[upload_index + 1:]
        if remainder and _VERSION_SEGMENT.match(remainder[0]):
            remainder = remainder[1:]
        if not remainder or not remainder[-1]:
            return None

        public_id = "/".join(remainder)
        if resource_type == "image":
            last_dot = public_id.rfind(".")
            if last_dot > public_id.rfind("/"):
                public_id = public_id[:last_dot]

        return public_id, resource_type

    def destroy(self, url: str) -> None:
        parsed = self.parse_public_id(url)
        if parsed is None:
            logger.warning(f"Not a Cloudinary delivery URL, treating as already deleted: {url}")
            return
        if not self.configured:
            raise RemoteStorageError("Cloudinary is not configured.")

        public_id, resource_type = parsed
        try:
            result = self.uploader.destroy(
                public_id, resource_type=resource_type, invalidate=True, **self._credentials()
            )
        except Exception as e:
            raise RemoteStorageError(f"Failed to delete {public_id} from media storage: {str(e)}") from e

        outcome = (result or {}).get("result")
        if outcome == "not found":
            logger.info(f"Cloudinary object already gone: {public_id} ({resource_type})")
        elif outcome != "ok":
            logger.warning(f"Unexpected Cloudinary destroy result for {public_id}: {outcome}")
        else:
            logger.info(f"🗑️ Deleted from Cloudinary: {public_id} ({resource_type})")
