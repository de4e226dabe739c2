import logging
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import Session

from app import crud, schemas
from app.core.deps import get_current_admin
from app.core.email_service import email_service
from app.db.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=schemas.ContactSubmitted, status_code=201)
def send_contact_message(
    contact_in: schemas.ContactCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    """Public contact form. Saves the message and notifies the admin by email."""
    contact = crud.contact.create(db, obj_in=contact_in)
    logger.info(f"Contact saved to database: {contact.id}")

    # Email problems must not fail the submission
    background_tasks.add_task(
        email_service.send_contact_notification,
        contact.name,
        contact.email,
        contact.message,
    )

    return {"message": "Message sent successfully", "contact_id": contact.id}


@router.get("/admin/all", response_model=List[schemas.Contact])
def get_contacts(
    db: Session = Depends(get_db),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    contacts = crud.contact.get_newest_first(db)
    logger.info(f"Fetched {len(contacts)} contacts")
    return contacts


@router.put("/{contact_id}/read", response_model=schemas.Contact)
def mark_as_read(
    contact_id: int,
    db: Session = Depends(get_db),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    contact = crud.contact.mark_as_read(db, id=contact_id)
    if not contact:
        raise HTTPException(status_code=404, detail="Contact not found")
    logger.info(f"Contact marked as read: {contact_id}")
    return contact


@router.delete("/{contact_id}", response_model=schemas.Message)
def delete_contact(
    contact_id: int,
    db: Session = Depends(get_db),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    contact = crud.contact.remove(db, id=contact_id)
    if not contact:
        raise HTTPException(status_code=404, detail="Contact not found")
    logger.info(f"Contact deleted: {contact_id}")
    return {"message": "Contact deleted successfully"}
