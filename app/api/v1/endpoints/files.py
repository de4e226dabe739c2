import mimetypes

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from app.core.deps import get_storage
from app.services.storage import AttachmentStorage
from app.services.storage.local import LOCAL_URL_PREFIX

router = APIRouter()

IMAGE_CACHE_CONTROL = "public, max-age=31536000, immutable"
DOCUMENT_CACHE_CONTROL = "public, max-age=3600"


@router.get("/{file_path:path}")
def serve_upload(file_path: str, storage: AttachmentStorage = Depends(get_storage)):
    """Serve files kept on local disk"""
    path = storage.resolve_local(f"{LOCAL_URL_PREFIX}/{file_path}")
    if path is None or not path.is_file():
        raise HTTPException(status_code=404, detail="File not found")

    media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    cache_control = IMAGE_CACHE_CONTROL if media_type.startswith("image/") else DOCUMENT_CACHE_CONTROL
    return FileResponse(path, media_type=media_type, headers={"Cache-Control": cache_control})
