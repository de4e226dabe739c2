from sqlalchemy import Column, String, Enum
import enum


class FileType(str, enum.Enum):
    IMAGE = "image"
    PDF = "pdf"


class AttachmentMixin:
    """Single attachment embedded in a content record.

    At most one of ``image_url`` / ``pdf_url`` is set at a time and
    ``file_type`` says which one.
    """

    image_url = Column(String(1000), nullable=True)
    pdf_url = Column(String(1000), nullable=True)
    file_type = Column(Enum(FileType), nullable=True)
    original_file_name = Column(String(255), nullable=True)
    display_size = Column(String(50), nullable=True)

    @property
    def file_url(self):
        if self.file_type == FileType.PDF:
            return self.pdf_url
        if self.file_type == FileType.IMAGE:
            return self.image_url
        return self.image_url or self.pdf_url

    @property
    def attachment_refs(self):
        """Every stored reference currently held by the record."""
        return [ref for ref in (self.image_url, self.pdf_url) if ref]

    def set_attachment(self, ref, file_type, original_file_name=None, display_size=None):
        """Point the record at a new file, clearing whatever kind was there before."""
        file_type = FileType(file_type)
        self.image_url = ref if file_type == FileType.IMAGE else None
        self.pdf_url = ref if file_type == FileType.PDF else None
        self.file_type = file_type
        self.original_file_name = original_file_name
        self.display_size = display_size
        self.attachment_changed()

    def clear_attachment(self):
        self.image_url = None
        self.pdf_url = None
        self.file_type = None
        self.original_file_name = None
        self.display_size = None
        self.attachment_changed()

    def attachment_changed(self):
        pass
