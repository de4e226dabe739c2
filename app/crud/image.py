from typing import List
from sqlalchemy import desc
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.image import Image
from app.schemas.image import ImageCreate, ImageUpdate


class CRUDImage(CRUDBase[Image, ImageCreate, ImageUpdate]):
    def get_newest_first(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Image]:
        return (
            db.query(Image)
            .order_by(desc(Image.created_at), desc(Image.id))
            .offset(skip)
            .limit(limit)
            .all()
        )


image = CRUDImage(Image)
