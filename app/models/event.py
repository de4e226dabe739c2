from sqlalchemy import Column, String, Text, DateTime
from app.models.base import BaseModel
from app.models.attachment import AttachmentMixin


class Event(AttachmentMixin, BaseModel):
    __tablename__ = "events"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    location = Column(String(255), nullable=False)
