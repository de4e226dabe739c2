# File: app/api/v1/api.py
from fastapi import APIRouter
from app.api.v1.endpoints import blogs, events, careers, images, contact

# Create main API router
api_router = APIRouter()

api_router.include_router(
    blogs.router,
    prefix="/blogs",
    tags=["blogs"]
)

api_router.include_router(
    events.router,
    prefix="/events",
    tags=["events"]
)

api_router.include_router(
    careers.router,
    prefix="/careers",
    tags=["careers"]
)

api_router.include_router(
    images.router,
    prefix="/images",
    tags=["images"]
)

api_router.include_router(
    contact.router,
    prefix="/contact",
    tags=["contact"]
)
