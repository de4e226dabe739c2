from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime
from app.schemas.attachment import AttachmentFields


class BlogBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    author: str = Field(..., min_length=1, max_length=255)
    published: bool = False

    @validator("title", "author", pre=True)
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class BlogCreate(BlogBase):
    pass


class BlogUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    author: Optional[str] = Field(None, min_length=1, max_length=255)
    published: Optional[bool] = None


class Blog(AttachmentFields):
    id: int
    title: str
    content: Optional[str] = None
    excerpt: Optional[str] = None
    author: str
    published: bool
    is_pdf_post: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
