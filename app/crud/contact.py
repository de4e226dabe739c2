from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.contact import Contact
from app.schemas.contact import ContactCreate, ContactUpdate


class CRUDContact(CRUDBase[Contact, ContactCreate, ContactUpdate]):
    def get_newest_first(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Contact]:
        return (
            db.query(Contact)
            .order_by(desc(Contact.created_at), desc(Contact.id))
            .offset(skip)
            .limit(limit)
            .all()
        )

    def mark_as_read(self, db: Session, *, id: int) -> Optional[Contact]:
        contact = self.get(db, id=id)
        if not contact:
            return None
        contact.read = True
        db.commit()
        db.refresh(contact)
        return contact


contact = CRUDContact(Contact)
