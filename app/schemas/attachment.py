from typing import Optional
from pydantic import BaseModel
from app.models.attachment import FileType


class AttachmentFields(BaseModel):
    image_url: Optional[str] = None
    pdf_url: Optional[str] = None
    file_url: Optional[str] = None
    file_type: Optional[FileType] = None
    original_file_name: Optional[str] = None
    display_size: Optional[str] = None


class Message(BaseModel):
    message: str
