from .blog import blog
from .event import event
from .career import career
from .image import image
from .contact import contact

__all__ = ["blog", "event", "career", "image", "contact"]
