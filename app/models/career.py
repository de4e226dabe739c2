from sqlalchemy import Column, String, Text, Boolean, DateTime, Enum, JSON
from app.models.base import BaseModel
from app.models.attachment import AttachmentMixin
import enum


class CareerType(str, enum.Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"


class Career(AttachmentMixin, BaseModel):
    __tablename__ = "careers"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(JSON, nullable=False, default=list)
    location = Column(String(255), nullable=False)
    # values_callable keeps "full-time" (not "FULL_TIME") in the column
    type = Column(
        Enum(CareerType, values_callable=lambda enum_cls: [item.value for item in enum_cls]),
        nullable=False,
    )
    salary = Column(String(100), nullable=True)
    application_deadline = Column(DateTime(timezone=True), nullable=False)
    published = Column(Boolean, default=False, nullable=False)
