from sqlalchemy import Column, String, Boolean
from app.models.base import BaseModel


class Contact(BaseModel):
    __tablename__ = "contacts"

    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    message = Column(String(2000), nullable=False)
    read = Column(Boolean, default=False, nullable=False)
