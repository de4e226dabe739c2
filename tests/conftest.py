import io
import os
from types import SimpleNamespace

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEND_EMAILS"] = "false"
os.environ["STORAGE_MODE"] = "hybrid"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["CLOUDINARY_CLOUD_NAME"] = "demo"
os.environ["CLOUDINARY_API_KEY"] = "key"
os.environ["CLOUDINARY_API_SECRET"] = "secret"
os.environ.pop("VERCEL", None)
os.environ.pop("VERCEL_ENV", None)
os.environ.pop("EPHEMERAL_FILESYSTEM", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.deps import get_current_admin, get_storage
from app.db.database import get_db
from app.main import app
from app.models import Base
from app.schemas.auth import TokenData
from app.services.storage import (
    AttachmentStorage,
    CloudinaryMediaService,
    LocalDiskStorage,
    StorageMode,
)

ADMIN_SUB = "admin@ganu.org"


class FakeUploader:
    """Stands in for ``cloudinary.uploader`` and records every call."""

    def __init__(self):
        self.uploads = []
        self.destroyed = []
        self.fail_upload = False
        self.fail_destroy = False

    def upload(self, file, **options):
        if self.fail_upload:
            raise Exception("Cloudinary is down")
        data = file.read()
        self.uploads.append({"name": file.name, "size": len(data), "options": options})

        public_id = f"{options['folder']}/{options['public_id']}"
        resource_type = options["resource_type"]
        if resource_type == "raw":
            url = f"https://res.cloudinary.com/demo/raw/upload/v1700000000/{public_id}"
        else:
            url = f"https://res.cloudinary.com/demo/image/upload/v1700000000/{public_id}.jpg"
        return {"secure_url": url, "public_id": public_id, "resource_type": resource_type}

    def destroy(self, public_id, **options):
        if self.fail_destroy:
            raise Exception("Cloudinary is down")
        self.destroyed.append((public_id, options["resource_type"]))
        return {"result": "ok"}


def make_storage(root, uploader, mode=StorageMode.HYBRID, ephemeral_filesystem=False):
    return AttachmentStorage(
        local=LocalDiskStorage(root),
        media=CloudinaryMediaService("demo", "key", "secret", uploader=uploader),
        mode=mode,
        ephemeral_filesystem=ephemeral_filesystem,
        remote_root_folder="ganu",
    )


def fake_upload(filename, data, content_type, size=None):
    """Duck-typed ``UploadFile`` for calling the storage layer directly."""
    return SimpleNamespace(
        filename=filename,
        file=io.BytesIO(data),
        content_type=content_type,
        size=len(data) if size is None else size,
    )


def jpeg_bytes(size):
    return b"\xff\xd8\xff\xe0" + b"\x00" * (size - 4)


def pdf_bytes(size):
    return b"%PDF-1.4\n" + b"0" * (size - 9)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def uploads_root(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def storage(uploads_root, uploader):
    return make_storage(uploads_root, uploader)


def _override(db_session, storage, admin=True):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    if admin:
        app.dependency_overrides[get_current_admin] = lambda: TokenData(sub=ADMIN_SUB, role="ADMIN")


@pytest.fixture
def client(db_session, storage):
    _override(db_session, storage)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(db_session, storage):
    """Real admin guard, no overridden credentials."""
    _override(db_session, storage, admin=False)
    yield TestClient(app)
    app.dependency_overrides.clear()
