import pytest

from app.models.blog import Blog
from app.services.attachment_lifecycle import AttachmentLifecycle
from app.services.storage import UploadPolicy
from tests.conftest import fake_upload, jpeg_bytes, pdf_bytes

POLICY = UploadPolicy(max_size_mb=20, allow_pdf=True)


class _BrokenModel:
    def __init__(self, **data):
        raise TypeError("unexpected field")


def test_create_removes_upload_when_record_cannot_be_built(db_session, storage, uploads_root):
    lifecycle = AttachmentLifecycle(storage)

    with pytest.raises(TypeError):
        lifecycle.create(
            db_session,
            _BrokenModel,
            {"bogus": 1},
            fake_upload("report.pdf", pdf_bytes(1024), "application/pdf"),
            namespace="blogs",
            policy=POLICY,
        )

    assert list((uploads_root / "blogs").iterdir()) == []


def test_update_removes_upload_when_field_cannot_be_set(db_session, storage, uploader):
    lifecycle = AttachmentLifecycle(storage)
    blog = lifecycle.create(
        db_session, Blog, {"title": "T", "author": "A"}, namespace="blogs", policy=POLICY
    )

    with pytest.raises(AttributeError):
        lifecycle.update(
            db_session,
            blog,
            {"title": "New", "file_url": "read-only property"},
            fake_upload("a.jpg", jpeg_bytes(1024), "image/jpeg"),
            namespace="blogs",
            policy=POLICY,
        )

    assert len(uploader.uploads) == 1
    assert len(uploader.destroyed) == 1
    assert blog.title == "T"
