from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime


class ImageCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = ""


class ImageUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None

    @validator("title")
    def title_not_null(cls, v):
        # Omit the field to keep the current title
        if v is None:
            raise ValueError("title cannot be null")
        return v


class Image(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    file_url: str
    original_name: Optional[str] = None
    uploaded_by: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ImageResponse(BaseModel):
    message: str
    image: Image
