from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.career import Career
from app.schemas.career import CareerCreate, CareerUpdate


class CRUDCareer(CRUDBase[Career, CareerCreate, CareerUpdate]):
    def _open_positions(self, db: Session):
        now = datetime.now(timezone.utc)
        return db.query(Career).filter(
            Career.published == True,
            Career.application_deadline >= now,
        )

    def get_open(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Career]:
        """Published careers whose application deadline has not passed"""
        return (
            self._open_positions(db)
            .order_by(desc(Career.created_at), desc(Career.id))
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_open_by_id(self, db: Session, *, id: int) -> Optional[Career]:
        return self._open_positions(db).filter(Career.id == id).first()

    def get_all_newest_first(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Career]:
        return (
            db.query(Career)
            .order_by(desc(Career.created_at), desc(Career.id))
            .offset(skip)
            .limit(limit)
            .all()
        )


career = CRUDCareer(Career)
