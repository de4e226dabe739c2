from typing import Optional, Type, TypeVar

from fastapi import HTTPException, Request, UploadFile
from pydantic import BaseModel, ValidationError

SchemaType = TypeVar("SchemaType", bound=BaseModel)

URL_FIELDS = ("image_url", "pdf_url", "file_url")


def format_validation_errors(errors) -> str:
    messages = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return "; ".join(messages)


def parse_form(schema_cls: Type[SchemaType], **values) -> SchemaType:
    """Build a schema from multipart form fields, dropping the ones not sent."""
    data = {key: value for key, value in values.items() if value is not None}
    try:
        return schema_cls(**data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=format_validation_errors(e.errors()))


def uploaded(upload: Optional[UploadFile]) -> Optional[UploadFile]:
    """Browsers send an empty file part when nothing was picked"""
    if upload is None or not upload.filename:
        return None
    return upload


def absolute_url(request: Request, ref: Optional[str]) -> Optional[str]:
    if ref and ref.startswith("/"):
        return f"{str(request.base_url).rstrip('/')}{ref}"
    return ref


def to_response(schema_cls: Type[SchemaType], db_obj, request: Request) -> SchemaType:
    """Serialize a record, turning local ``/uploads/...`` paths into absolute URLs."""
    item = schema_cls.model_validate(db_obj)
    updates = {}
    for field in URL_FIELDS:
        value = getattr(item, field, None)
        if value and value.startswith("/"):
            updates[field] = absolute_url(request, value)
    return item.model_copy(update=updates) if updates else item
