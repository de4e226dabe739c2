# File: app/schemas/event.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.schemas.attachment import AttachmentFields


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    date: datetime
    location: str = Field(..., min_length=1, max_length=255)


class EventCreate(EventBase):
    pass


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime] = None
    location: Optional[str] = Field(None, min_length=1, max_length=255)


class Event(AttachmentFields):
    id: int
    title: str
    description: str
    date: datetime
    location: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
