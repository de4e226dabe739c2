import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from sqlalchemy.orm import Session

from app import crud, schemas
from app.api.utils import parse_form, to_response, uploaded
from app.core.config import settings
from app.core.deps import get_current_admin, get_lifecycle
from app.db.database import get_db
from app.models.event import Event
from app.services.attachment_lifecycle import AttachmentLifecycle
from app.services.storage import UploadPolicy

logger = logging.getLogger(__name__)

router = APIRouter()

EVENT_UPLOAD_POLICY = UploadPolicy(max_size_mb=settings.MAX_IMAGE_UPLOAD_MB, allow_pdf=False)


def _get_event_or_404(db: Session, event_id: int) -> Event:
    event = crud.event.get(db, id=event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.get("/", response_model=List[schemas.Event])
def get_events(request: Request, db: Session = Depends(get_db)):
    """All events ordered by date"""
    events = crud.event.get_upcoming_first(db)
    return [to_response(schemas.Event, event, request) for event in events]


@router.get("/{event_id}", response_model=schemas.Event)
def get_event(event_id: int, request: Request, db: Session = Depends(get_db)):
    return to_response(schemas.Event, _get_event_or_404(db, event_id), request)


@router.post("/", response_model=schemas.Event, status_code=201)
def create_event(
    request: Request,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    date: Optional[datetime] = Form(None),
    location: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    lifecycle: AttachmentLifecycle = Depends(get_lifecycle),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    """Create an event with an optional cover image"""
    event_in = parse_form(
        schemas.EventCreate,
        title=title,
        description=description,
        date=date,
        location=location,
    )

    event = lifecycle.create(
        db,
        Event,
        event_in.dict(),
        uploaded(image),
        namespace="events",
        policy=EVENT_UPLOAD_POLICY,
    )

    logger.info(f"Event created: {event.id} by {current_admin.sub}")
    return to_response(schemas.Event, event, request)


@router.put("/{event_id}", response_model=schemas.Event)
def update_event(
    event_id: int,
    request: Request,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    date: Optional[datetime] = Form(None),
    location: Optional[str] = Form(None),
    remove_image: bool = Form(False),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    lifecycle: AttachmentLifecycle = Depends(get_lifecycle),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    event = _get_event_or_404(db, event_id)

    event_in = parse_form(
        schemas.EventUpdate,
        title=title,
        description=description,
        date=date,
        location=location,
    )

    event = lifecycle.update(
        db,
        event,
        event_in.dict(exclude_unset=True),
        uploaded(image),
        remove_file=remove_image,
        namespace="events",
        policy=EVENT_UPLOAD_POLICY,
    )

    logger.info(f"Event updated: {event_id} by {current_admin.sub}")
    return to_response(schemas.Event, event, request)


@router.delete("/{event_id}", response_model=schemas.Message)
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    lifecycle: AttachmentLifecycle = Depends(get_lifecycle),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    event = _get_event_or_404(db, event_id)
    lifecycle.delete(db, event)
    logger.info(f"Event deleted: {event_id} by {current_admin.sub}")
    return {"message": "Event deleted successfully"}
