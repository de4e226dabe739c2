from typing import List
from sqlalchemy import desc
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.blog import Blog
from app.schemas.blog import BlogCreate, BlogUpdate


class CRUDBlog(CRUDBase[Blog, BlogCreate, BlogUpdate]):
    def get_published(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Blog]:
        return (
            db.query(Blog)
            .filter(Blog.published == True)
            .order_by(desc(Blog.created_at), desc(Blog.id))
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_published_by_id(self, db: Session, *, id: int):
        return db.query(Blog).filter(Blog.id == id, Blog.published == True).first()

    def get_all_newest_first(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Blog]:
        return (
            db.query(Blog)
            .order_by(desc(Blog.created_at), desc(Blog.id))
            .offset(skip)
            .limit(limit)
            .all()
        )


blog = CRUDBlog(Blog)
