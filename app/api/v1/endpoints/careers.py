import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from sqlalchemy.orm import Session

from app import crud, schemas
from app.api.utils import parse_form, to_response, uploaded
from app.core.config import settings
from app.core.deps import get_current_admin, get_lifecycle
from app.db.database import get_db
from app.models.career import Career
from app.services.attachment_lifecycle import AttachmentLifecycle
from app.services.storage import UploadPolicy

logger = logging.getLogger(__name__)

router = APIRouter()

CAREER_UPLOAD_POLICY = UploadPolicy(max_size_mb=settings.MAX_DOCUMENT_UPLOAD_MB, allow_pdf=True)


def _get_career_or_404(db: Session, career_id: int, open_only: bool = False) -> Career:
    if open_only:
        career = crud.career.get_open_by_id(db, id=career_id)
    else:
        career = crud.career.get(db, id=career_id)
    if not career:
        raise HTTPException(status_code=404, detail="Career not found")
    return career


@router.get("/", response_model=List[schemas.Career])
def get_careers(request: Request, db: Session = Depends(get_db)):
    """Published careers still accepting applications"""
    careers = crud.career.get_open(db)
    return [to_response(schemas.Career, career, request) for career in careers]


@router.get("/admin/all", response_model=List[schemas.Career])
def get_all_careers(
    request: Request,
    db: Session = Depends(get_db),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    """All careers including unpublished and expired"""
    careers = crud.career.get_all_newest_first(db)
    return [to_response(schemas.Career, career, request) for career in careers]


@router.get("/admin/{career_id}", response_model=schemas.Career)
def get_career_admin(
    career_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    return to_response(schemas.Career, _get_career_or_404(db, career_id), request)


@router.get("/{career_id}", response_model=schemas.Career)
def get_career(career_id: int, request: Request, db: Session = Depends(get_db)):
    return to_response(schemas.Career, _get_career_or_404(db, career_id, open_only=True), request)


@router.post("/", response_model=schemas.Career, status_code=201)
def create_career(
    request: Request,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    requirements: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    type: Optional[str] = Form(None),
    salary: Optional[str] = Form(None),
    application_deadline: Optional[str] = Form(None),
    published: Optional[bool] = Form(None),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    lifecycle: AttachmentLifecycle = Depends(get_lifecycle),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    """Create a career posting; ``requirements`` is a JSON array string"""
    career_in = parse_form(
        schemas.CareerCreate,
        title=title,
        description=description,
        requirements=requirements,
        location=location,
        type=type,
        salary=salary,
        application_deadline=application_deadline,
        published=published,
    )

    career = lifecycle.create(
        db,
        Career,
        career_in.dict(),
        uploaded(file),
        namespace="careers",
        policy=CAREER_UPLOAD_POLICY,
    )

    logger.info(f"Career created: {career.id} by {current_admin.sub}")
    return to_response(schemas.Career, career, request)


@router.put("/{career_id}", response_model=schemas.Career)
def update_career(
    career_id: int,
    request: Request,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    requirements: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    type: Optional[str] = Form(None),
    salary: Optional[str] = Form(None),
    application_deadline: Optional[str] = Form(None),
    published: Optional[bool] = Form(None),
    remove_file: bool = Form(False),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    lifecycle: AttachmentLifecycle = Depends(get_lifecycle),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    career = _get_career_or_404(db, career_id)

    career_in = parse_form(
        schemas.CareerUpdate,
        title=title,
        description=description,
        requirements=requirements,
        location=location,
        type=type,
        salary=salary,
        application_deadline=application_deadline,
        published=published,
    )

    career = lifecycle.update(
        db,
        career,
        career_in.dict(exclude_unset=True),
        uploaded(file),
        remove_file=remove_file,
        namespace="careers",
        policy=CAREER_UPLOAD_POLICY,
    )

    logger.info(f"Career updated: {career_id} by {current_admin.sub}")
    return to_response(schemas.Career, career, request)


@router.delete("/{career_id}", response_model=schemas.Message)
def delete_career(
    career_id: int,
    db: Session = Depends(get_db),
    lifecycle: AttachmentLifecycle = Depends(get_lifecycle),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    career = _get_career_or_404(db, career_id)
    lifecycle.delete(db, career)
    logger.info(f"Career deleted: {career_id} by {current_admin.sub}")
    return {"message": "Career deleted successfully"}
