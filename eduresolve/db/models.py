import uuid
import enum
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic import Field as RecordField
from pydantic.alias_generators import to_camel
from sqlalchemy import Column, JSON, DateTime
from sqlmodel import Field, SQLModel


class UserRole(str, enum.Enum):
    STUDENT = "student"
    ADMIN = "admin"


class ComplaintStatus(str, enum.Enum):
    PENDING = "Pending"
    SUBMITTED = "Submitted"
    VERIFIED = "Verified"
    UNDER_REVIEW = "In Review"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class ComplaintCategory(str, enum.Enum):
    HOSTEL = "Hostel"
    ACADEMIC = "Academic"
    FACILITIES = "Facilities"
    STAFF = "Staff"
    OTHER = "Other"


class ComplaintPriority(str, enum.Enum):
    LOW = "Low Priority"
    MEDIUM = "Medium Priority"
    HIGH = "High Priority"
    URGENT = "Urgent"


def generate_uuid() -> str:
    return str(uuid.uuid4())


def generate_complaint_id() -> str:
    return f"C-{uuid.uuid4().hex[:8].upper()}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordModel(BaseModel):
    """Base for records kept inside the JSON collections (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class User(RecordModel):
    id: str = RecordField(default_factory=generate_uuid)
    name: str
    email: str
    hashed_password: str
    role: UserRole = UserRole.STUDENT


class Complaint(RecordModel):
    id: str = RecordField(default_factory=generate_complaint_id)
    student_id: str
    student_name: str
    subject: str
    description: str
    status: ComplaintStatus = ComplaintStatus.SUBMITTED
    category: ComplaintCategory
    priority: ComplaintPriority
    remarks: str = ""  # Student-facing response
    review_notes: Optional[str] = None  # Internal admin notes
    is_verified: Optional[bool] = None
    created_at: datetime = RecordField(default_factory=utcnow)
    updated_at: Optional[datetime] = None


# Key-value medium: one row per named entry, the value is a whole JSON document
class StoreEntry(SQLModel, table=True):
    __tablename__ = "store_entry"

    key: str = Field(primary_key=True)
    value: Any = Field(default=None, sa_column=Column(JSON))
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True))
    )
