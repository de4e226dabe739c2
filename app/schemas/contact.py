from pydantic import BaseModel, EmailStr, Field, validator
from typing import Optional
from datetime import datetime


class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    message: str = Field(..., min_length=1, max_length=2000)

    @validator("name", "message", pre=True)
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @validator("email", pre=True)
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class ContactUpdate(BaseModel):
    read: Optional[bool] = None


class Contact(BaseModel):
    id: int
    name: str
    email: str
    message: str
    read: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ContactSubmitted(BaseModel):
    message: str
    contact_id: int
