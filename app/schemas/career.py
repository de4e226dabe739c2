import json
from pydantic import BaseModel, Field, validator
from typing import List, Optional
from datetime import datetime
from app.models.career import CareerType
from app.schemas.attachment import AttachmentFields


def _parse_requirements(v):
    # Multipart forms send the list as a JSON encoded string
    if isinstance(v, str):
        v = v.strip()
        if not v:
            return []
        try:
            v = json.loads(v)
        except ValueError:
            raise ValueError("requirements must be a JSON array of strings")
    return v


class CareerBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    requirements: List[str] = []
    location: str = Field(..., min_length=1, max_length=255)
    type: CareerType
    salary: Optional[str] = Field(None, max_length=100)
    application_deadline: datetime
    published: bool = False

    @validator("requirements", pre=True)
    def parse_requirements(cls, v):
        return _parse_requirements(v)


class CareerCreate(CareerBase):
    pass


class CareerUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    requirements: Optional[List[str]] = None
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[CareerType] = None
    salary: Optional[str] = Field(None, max_length=100)
    application_deadline: Optional[datetime] = None
    published: Optional[bool] = None

    @validator("requirements", pre=True)
    def parse_requirements(cls, v):
        return _parse_requirements(v)


class Career(AttachmentFields):
    id: int
    title: str
    description: str
    requirements: List[str] = []
    location: str
    type: CareerType
    salary: Optional[str] = None
    application_deadline: datetime
    published: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
