# File: app/crud/event.py
from typing import List
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.event import Event
from app.schemas.event import EventCreate, EventUpdate


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):

    def get_upcoming_first(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Event]:
        return (
            db.query(Event)
            .order_by(Event.date.asc(), Event.id.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )


event = CRUDEvent(Event)
