from sqlalchemy import Column, String, Text
from app.models.base import BaseModel


class Image(BaseModel):
    __tablename__ = "images"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    file_url = Column(String(1000), nullable=False)  # Cloudinary URL or /uploads/ path
    original_name = Column(String(255), nullable=True)
    uploaded_by = Column(String(255), nullable=True)  # Subject of the admin token

    @property
    def attachment_refs(self):
        return [self.file_url] if self.file_url else []

    def set_attachment(self, ref, file_type, original_file_name=None, display_size=None):
        self.file_url = ref
        self.original_name = original_file_name
