import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from sqlalchemy.orm import Session

from app import crud, schemas
from app.api.utils import parse_form, to_response, uploaded
from app.core.config import settings
from app.core.deps import get_current_admin, get_lifecycle
from app.db.database import get_db
from app.models.image import Image
from app.services.attachment_lifecycle import AttachmentLifecycle
from app.services.storage import FileValidationError, UploadPolicy

logger = logging.getLogger(__name__)

router = APIRouter()

GALLERY_UPLOAD_POLICY = UploadPolicy(max_size_mb=settings.MAX_IMAGE_UPLOAD_MB, allow_pdf=False)


def _get_image_or_404(db: Session, image_id: int) -> Image:
    image = crud.image.get(db, id=image_id)
    if not image:
        raise HTTPException(status_code=404, detail="Image not found")
    return image


@router.get("/", response_model=List[schemas.Image])
def get_images(request: Request, db: Session = Depends(get_db)):
    """Gallery images, newest first"""
    images = crud.image.get_newest_first(db)
    return [to_response(schemas.Image, image, request) for image in images]


@router.post("/", response_model=schemas.ImageResponse, status_code=201)
def upload_image(
    request: Request,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    lifecycle: AttachmentLifecycle = Depends(get_lifecycle),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    """Upload a gallery image; the title defaults to the file name"""
    upload = uploaded(image)
    if upload is None:
        raise FileValidationError("No file uploaded")

    image_in = parse_form(
        schemas.ImageCreate,
        title=title or upload.filename,
        description=description or "",
    )

    data = image_in.dict()
    data["uploaded_by"] = current_admin.sub
    db_image = lifecycle.create(
        db,
        Image,
        data,
        upload,
        namespace="images",
        policy=GALLERY_UPLOAD_POLICY,
    )

    logger.info(f"Image uploaded: {db_image.id} by {current_admin.sub}")
    return {"message": "Image uploaded", "image": to_response(schemas.Image, db_image, request)}


@router.put("/{image_id}", response_model=schemas.ImageResponse)
def update_image(
    image_id: int,
    image_in: schemas.ImageUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    """Update title/description only; the file itself is immutable"""
    db_image = _get_image_or_404(db, image_id)
    db_image = crud.image.update(db, db_obj=db_image, obj_in=image_in)
    logger.info(f"Image updated: {image_id} by {current_admin.sub}")
    return {"message": "Image updated", "image": to_response(schemas.Image, db_image, request)}


@router.delete("/{image_id}", response_model=schemas.Message)
def delete_image(
    image_id: int,
    db: Session = Depends(get_db),
    lifecycle: AttachmentLifecycle = Depends(get_lifecycle),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    db_image = _get_image_or_404(db, image_id)
    lifecycle.delete(db, db_image)
    logger.info(f"Image deleted: {image_id} by {current_admin.sub}")
    return {"message": "Image deleted successfully"}
