import pytest
from sqlalchemy.exc import IntegrityError

from app.models.blog import Blog
from tests.conftest import jpeg_bytes, pdf_bytes

MB = 1024 * 1024


def create_blog(client, files=None, **fields):
    data = {"title": "Harvest season", "author": "Jane", "content": "Body", "published": "true"}
    data.update(fields)
    return client.post("/api/blogs/", data=data, files=files)


def local_name(url):
    return url.rsplit("/", 1)[-1]


def test_create_blog_without_file(client):
    response = create_blog(client)

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Harvest season"
    assert body["file_url"] is None
    assert body["file_type"] is None
    assert body["is_pdf_post"] is False


def test_create_blog_requires_title(client):
    response = client.post("/api/blogs/", data={"author": "Jane"})
    assert response.status_code == 400
    assert "title" in response.json()["detail"]


def test_blog_image_then_pdf_then_delete(client, uploader, uploads_root):
    # 2 MB image lands on Cloudinary
    response = create_blog(client, files={"file": ("photo.jpg", jpeg_bytes(2 * MB), "image/jpeg")})
    assert response.status_code == 201
    blog = response.json()
    assert blog["file_type"] == "image"
    assert blog["image_url"].startswith("https://res.cloudinary.com/demo/image/upload/")
    assert blog["pdf_url"] is None
    assert blog["original_file_name"] == "photo.jpg"
    assert blog["display_size"] == "2 MB"
    assert uploader.uploads[0]["options"]["folder"] == "ganu/blogs"
    image_public_id = uploader.uploads[0]["options"]["folder"] + "/" + uploader.uploads[0]["options"]["public_id"]

    # 3 MB PDF replaces it and stays on local disk
    response = client.put(
        f"/api/blogs/{blog['id']}",
        files={"file": ("report.pdf", pdf_bytes(3 * MB), "application/pdf")},
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["file_type"] == "pdf"
    assert updated["image_url"] is None
    assert updated["pdf_url"].startswith("http://testserver/uploads/blogs/blog-")
    assert updated["file_url"] == updated["pdf_url"]
    assert updated["is_pdf_post"] is True
    assert updated["content"] == ""
    assert updated["display_size"] == "3 MB"
    assert uploader.destroyed == [(image_public_id, "image")]

    stored = uploads_root / "blogs" / local_name(updated["pdf_url"])
    assert stored.read_bytes()[:8] == b"%PDF-1.4"

    download = client.get(f"/api/blogs/{blog['id']}/download")
    assert download.status_code == 200
    assert "report.pdf" in download.headers["content-disposition"]

    served = client.get(f"/uploads/blogs/{local_name(updated['pdf_url'])}")
    assert served.status_code == 200
    assert served.headers["cache-control"] == "public, max-age=3600"

    response = client.delete(f"/api/blogs/{blog['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Blog deleted successfully"}
    assert not stored.exists()
    assert client.get(f"/api/blogs/admin/{blog['id']}").status_code == 404


def test_remove_file_flag_clears_attachment(client, uploader):
    blog = create_blog(client, files={"file": ("photo.jpg", jpeg_bytes(1024), "image/jpeg")}).json()

    response = client.put(f"/api/blogs/{blog['id']}", data={"remove_file": "true"})

    assert response.status_code == 200
    assert response.json()["file_url"] is None
    assert len(uploader.destroyed) == 1


def test_update_without_file_keeps_attachment(client, uploader):
    blog = create_blog(client, files={"file": ("photo.jpg", jpeg_bytes(1024), "image/jpeg")}).json()

    response = client.put(f"/api/blogs/{blog['id']}", data={"title": "New title"})

    assert response.status_code == 200
    assert response.json()["title"] == "New title"
    assert response.json()["image_url"] == blog["image_url"]
    assert uploader.destroyed == []


def test_rejects_unsupported_file_type(client, db_session, uploader):
    response = create_blog(client, files={"file": ("notes.txt", b"hello", "text/plain")})

    assert response.status_code == 400
    assert response.json()["detail"] == "Only image and PDF files are allowed!"
    assert db_session.query(Blog).count() == 0
    assert uploader.uploads == []


def test_rejects_file_over_limit(client, db_session):
    response = create_blog(client, files={"file": ("huge.pdf", pdf_bytes(21 * MB), "application/pdf")})

    assert response.status_code == 400
    assert response.json()["detail"] == "File too large. Maximum size is 20MB."
    assert db_session.query(Blog).count() == 0


def test_remote_failure_creates_nothing(client, db_session, uploader):
    uploader.fail_upload = True

    response = create_blog(client, files={"file": ("photo.jpg", jpeg_bytes(1024), "image/jpeg")})

    assert response.status_code == 500
    assert "Cloudinary is down" in response.json()["detail"]
    assert db_session.query(Blog).count() == 0


def _failing_commit():
    raise IntegrityError("INSERT INTO blogs", {}, Exception("constraint failed"))


def test_failed_commit_removes_uploaded_pdf(client, db_session, uploads_root, monkeypatch):
    monkeypatch.setattr(db_session, "commit", _failing_commit)

    response = create_blog(client, files={"file": ("report.pdf", pdf_bytes(1024), "application/pdf")})

    assert response.status_code == 400
    assert response.json()["detail"] == "Error creating blog: constraint failed"
    assert list((uploads_root / "blogs").iterdir()) == []


def test_failed_commit_removes_uploaded_image(client, db_session, uploader, monkeypatch):
    monkeypatch.setattr(db_session, "commit", _failing_commit)

    response = create_blog(client, files={"file": ("photo.jpg", jpeg_bytes(1024), "image/jpeg")})

    assert response.status_code == 400
    assert len(uploader.uploads) == 1
    assert len(uploader.destroyed) == 1


def test_failed_update_keeps_previous_file(client, db_session, uploader, monkeypatch):
    blog = create_blog(client, files={"file": ("photo.jpg", jpeg_bytes(1024), "image/jpeg")}).json()
    monkeypatch.setattr(db_session, "commit", _failing_commit)

    response = client.put(
        f"/api/blogs/{blog['id']}",
        files={"file": ("new.jpg", jpeg_bytes(1024), "image/jpeg")},
    )

    assert response.status_code == 400
    monkeypatch.undo()
    # Only the new upload was cleaned up; the old image is still referenced
    assert len(uploader.destroyed) == 1
    assert client.get(f"/api/blogs/{blog['id']}").json()["image_url"] == blog["image_url"]


def test_public_listing_hides_unpublished(client):
    create_blog(client, title="Visible")
    hidden = create_blog(client, title="Draft", published="false").json()

    titles = [b["title"] for b in client.get("/api/blogs/").json()]

    assert titles == ["Visible"]
    assert client.get(f"/api/blogs/{hidden['id']}").status_code == 404
    assert len(client.get("/api/blogs/admin/all").json()) == 2


def test_download_without_attachment_is_404(client):
    blog = create_blog(client).json()
    assert client.get(f"/api/blogs/{blog['id']}/download").status_code == 404


def test_download_redirects_to_cloudinary(client):
    blog = create_blog(client, files={"file": ("photo.jpg", jpeg_bytes(1024), "image/jpeg")}).json()

    response = client.get(f"/api/blogs/{blog['id']}/download", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == blog["image_url"]


@pytest.mark.parametrize("method", ["put", "delete"])
def test_missing_blog_is_404(client, method):
    response = getattr(client, method)("/api/blogs/999")
    assert response.status_code == 404


def test_pdf_post_replaced_by_image(client, uploader, uploads_root):
    blog = create_blog(client, files={"file": ("report.pdf", pdf_bytes(1024), "application/pdf")}).json()
    stored = uploads_root / "blogs" / local_name(blog["pdf_url"])
    assert blog["is_pdf_post"] is True
    assert stored.exists()

    response = client.put(
        f"/api/blogs/{blog['id']}",
        data={"content": "Back to a normal post"},
        files={"file": ("photo.jpg", jpeg_bytes(1024), "image/jpeg")},
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["file_type"] == "image"
    assert updated["pdf_url"] is None
    assert updated["image_url"].startswith("https://res.cloudinary.com/")
    assert updated["is_pdf_post"] is False
    assert updated["content"] == "Back to a normal post"
    assert not stored.exists()


def test_failed_old_file_delete_keeps_committed_update(client, uploader):
    blog = create_blog(client, files={"file": ("a.jpg", jpeg_bytes(1024), "image/jpeg")}).json()
    uploader.fail_destroy = True

    response = client.put(
        f"/api/blogs/{blog['id']}",
        files={"file": ("b.jpg", jpeg_bytes(1024), "image/jpeg")},
    )

    assert response.status_code == 200
    assert response.json()["image_url"] != blog["image_url"]
    persisted = client.get(f"/api/blogs/admin/{blog['id']}").json()
    assert persisted["image_url"] == response.json()["image_url"]


def test_pdf_post_ignores_body_text_edits(client):
    blog = create_blog(client, files={"file": ("report.pdf", pdf_bytes(1024), "application/pdf")}).json()

    response = client.put(f"/api/blogs/{blog['id']}", data={"content": "Sneaky body", "title": "Renamed"})

    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"
    assert response.json()["content"] == ""
    assert response.json()["is_pdf_post"] is True
