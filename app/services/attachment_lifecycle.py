import logging
from typing import Any, Dict, Optional, Type

from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Session

from app.models.attachment import FileType
from app.services.storage import AttachmentStorage, StoredFile, UploadPolicy

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """The database rejected the record (constraint or type violation)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _attach(db_obj, stored: StoredFile) -> None:
    db_obj.set_attachment(
        stored.ref,
        FileType(stored.category.value),
        original_file_name=stored.original_name,
        display_size=stored.display_size,
    )


class AttachmentLifecycle:
    """Keeps a record's single attachment in step with the database.

    Order on every write: store the new file, commit, then delete whatever the
    record pointed at before. If the commit fails the freshly stored file is
    removed so nothing is left behind.
    """

    def __init__(self, storage: AttachmentStorage):
        self.storage = storage

    def _commit(self, db: Session, db_obj, stored: Optional[StoredFile], action: str) -> None:
        try:
            db.commit()
        except (IntegrityError, DataError) as e:
            db.rollback()
            self._discard(stored, action)
            raise PersistenceError(f"Error {action} {db_obj.__tablename__[:-1]}: {str(e.orig)}") from e
        except Exception:
            db.rollback()
            self._discard(stored, action)
            raise
        db.refresh(db_obj)

    def _discard(self, stored: Optional[StoredFile], action: str) -> None:
        if stored is not None:
            logger.warning(f"Database write failed while {action} record, removing uploaded {stored.ref}")
            self.storage.remove(stored.ref)

    def create(
        self,
        db: Session,
        model: Type,
        data: Dict[str, Any],
        upload=None,
        *,
        namespace: str,
        policy: UploadPolicy,
    ):
        # Upload first: a record must never reference a file that failed to land
        stored = self.storage.store(upload, namespace, policy) if upload is not None else None

        try:
            db_obj = model(**data)
            if stored is not None:
                _attach(db_obj, stored)
            db.add(db_obj)
        except Exception:
            self._discard(stored, "creating")
            raise
        self._commit(db, db_obj, stored, "creating")
        return db_obj

    def update(
        self,
        db: Session,
        db_obj,
        changes: Dict[str, Any],
        upload=None,
        *,
        remove_file: bool = False,
        namespace: str,
        policy: UploadPolicy,
    ):
        stored = self.storage.store(upload, namespace, policy) if upload is not None else None
        previous_refs = list(db_obj.attachment_refs) if (stored is not None or remove_file) else []

        try:
            for field, value in changes.items():
                setattr(db_obj, field, value)

            if stored is not None:
                _attach(db_obj, stored)
            elif remove_file:
                db_obj.clear_attachment()
            else:
                # Edited fields must still agree with the kept attachment, e.g. no body on a PDF post
                db_obj.attachment_changed()
        except Exception:
            db.rollback()
            self._discard(stored, "updating")
            raise

        self._commit(db, db_obj, stored, "updating")

        # Old files go only after the new state is committed
        new_ref = stored.ref if stored is not None else None
        for ref in previous_refs:
            if ref != new_ref:
                self.storage.remove(ref)
        return db_obj

    def delete(self, db: Session, db_obj) -> None:
        refs = list(db_obj.attachment_refs)
        db.delete(db_obj)
        db.commit()
        for ref in refs:
            self.storage.remove(ref)
