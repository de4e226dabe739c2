# File: app/schemas/__init__.py
from .attachment import AttachmentFields, Message
from .auth import TokenData
from .blog import Blog, BlogCreate, BlogUpdate
from .event import Event, EventCreate, EventUpdate
from .career import Career, CareerCreate, CareerUpdate
from .image import Image, ImageCreate, ImageUpdate, ImageResponse
from .contact import Contact, ContactCreate, ContactUpdate, ContactSubmitted
