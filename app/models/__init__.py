from .base import Base, BaseModel
from .attachment import AttachmentMixin, FileType
from .blog import Blog
from .event import Event
from .career import Career, CareerType
from .image import Image
from .contact import Contact
