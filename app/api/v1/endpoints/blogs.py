import logging
import mimetypes
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import FileResponse, RedirectResponse
from sqlalchemy.orm import Session

from app import crud, schemas
from app.api.utils import parse_form, to_response, uploaded
from app.core.config import settings
from app.core.deps import get_current_admin, get_lifecycle, get_storage
from app.db.database import get_db
from app.models.blog import Blog
from app.services.attachment_lifecycle import AttachmentLifecycle
from app.services.storage import AttachmentStorage, UploadPolicy, is_cloudinary_url

logger = logging.getLogger(__name__)

router = APIRouter()

# Blogs accept a cover image or a PDF post
BLOG_UPLOAD_POLICY = UploadPolicy(max_size_mb=settings.MAX_DOCUMENT_UPLOAD_MB, allow_pdf=True)


def _get_blog_or_404(db: Session, blog_id: int, published_only: bool = False) -> Blog:
    if published_only:
        blog = crud.blog.get_published_by_id(db, id=blog_id)
    else:
        blog = crud.blog.get(db, id=blog_id)
    if not blog:
        raise HTTPException(status_code=404, detail="Blog not found")
    return blog


@router.get("/", response_model=List[schemas.Blog])
def get_blogs(request: Request, db: Session = Depends(get_db)):
    """Published blogs, newest first"""
    blogs = crud.blog.get_published(db)
    return [to_response(schemas.Blog, blog, request) for blog in blogs]


@router.get("/admin/all", response_model=List[schemas.Blog])
def get_all_blogs(
    request: Request,
    db: Session = Depends(get_db),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    """All blogs including unpublished"""
    blogs = crud.blog.get_all_newest_first(db)
    return [to_response(schemas.Blog, blog, request) for blog in blogs]


@router.get("/admin/{blog_id}", response_model=schemas.Blog)
def get_blog_admin(
    blog_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    return to_response(schemas.Blog, _get_blog_or_404(db, blog_id), request)


@router.get("/{blog_id}", response_model=schemas.Blog)
def get_blog(blog_id: int, request: Request, db: Session = Depends(get_db)):
    return to_response(schemas.Blog, _get_blog_or_404(db, blog_id, published_only=True), request)


@router.get("/{blog_id}/download")
def download_blog_file(
    blog_id: int,
    db: Session = Depends(get_db),
    storage: AttachmentStorage = Depends(get_storage),
):
    """Serve a blog's attachment under the name it was uploaded with"""
    blog = _get_blog_or_404(db, blog_id, published_only=True)
    ref = blog.file_url
    if not ref:
        raise HTTPException(status_code=404, detail="Blog has no attachment")

    if is_cloudinary_url(ref):
        return RedirectResponse(ref)

    path = storage.resolve_local(ref)
    if path is None or not path.is_file():
        logger.warning(f"Attachment for blog {blog_id} is missing on disk: {ref}")
        raise HTTPException(status_code=404, detail="File not found")

    media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return FileResponse(path, media_type=media_type, filename=blog.original_file_name or path.name)


@router.post("/", response_model=schemas.Blog, status_code=201)
def create_blog(
    request: Request,
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    excerpt: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    published: Optional[bool] = Form(None),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    lifecycle: AttachmentLifecycle = Depends(get_lifecycle),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    """Create a blog post with an optional image or PDF"""
    blog_in = parse_form(
        schemas.BlogCreate,
        title=title,
        content=content,
        excerpt=excerpt,
        author=author,
        published=published,
    )

    blog = lifecycle.create(
        db,
        Blog,
        blog_in.dict(),
        uploaded(file),
        namespace="blogs",
        policy=BLOG_UPLOAD_POLICY,
    )

    logger.info(f"Blog created: {blog.id} by {current_admin.sub}")
    return to_response(schemas.Blog, blog, request)


@router.put("/{blog_id}", response_model=schemas.Blog)
def update_blog(
    blog_id: int,
    request: Request,
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    excerpt: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    published: Optional[bool] = Form(None),
    remove_file: bool = Form(False),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    lifecycle: AttachmentLifecycle = Depends(get_lifecycle),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    """Update a blog; a new file replaces the old one whatever its kind"""
    blog = _get_blog_or_404(db, blog_id)

    blog_in = parse_form(
        schemas.BlogUpdate,
        title=title,
        content=content,
        excerpt=excerpt,
        author=author,
        published=published,
    )

    blog = lifecycle.update(
        db,
        blog,
        blog_in.dict(exclude_unset=True),
        uploaded(file),
        remove_file=remove_file,
        namespace="blogs",
        policy=BLOG_UPLOAD_POLICY,
    )

    logger.info(f"Blog updated: {blog_id} by {current_admin.sub}")
    return to_response(schemas.Blog, blog, request)


@router.delete("/{blog_id}", response_model=schemas.Message)
def delete_blog(
    blog_id: int,
    db: Session = Depends(get_db),
    lifecycle: AttachmentLifecycle = Depends(get_lifecycle),
    current_admin: schemas.TokenData = Depends(get_current_admin),
):
    blog = _get_blog_or_404(db, blog_id)
    lifecycle.delete(db, blog)
    logger.info(f"Blog deleted: {blog_id} by {current_admin.sub}")
    return {"message": "Blog deleted successfully"}
