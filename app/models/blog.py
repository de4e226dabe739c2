from sqlalchemy import Column, String, Text, Boolean
from app.models.base import BaseModel
from app.models.attachment import AttachmentMixin, FileType


class Blog(AttachmentMixin, BaseModel):
    __tablename__ = "blogs"

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)  # Optional for PDF posts
    excerpt = Column(Text, nullable=True)
    author = Column(String(255), nullable=False)
    is_pdf_post = Column(Boolean, default=False, nullable=False)
    published = Column(Boolean, default=False, nullable=False)

    def attachment_changed(self):
        self.is_pdf_post = self.file_type == FileType.PDF
        if self.is_pdf_post:
            # PDF posts carry their body in the document
            self.content = ""
