from typing import Dict, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from eduresolve.db.models import ComplaintCategory, ComplaintPriority, ComplaintStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# --- Complaint Schemas ---
class ComplaintCreate(CamelModel):
    subject: str = Field(min_length=1)
    description: str = ""
    category: ComplaintCategory = ComplaintCategory.HOSTEL
    priority: ComplaintPriority = ComplaintPriority.LOW


class ComplaintStudentView(CamelModel):
    """What the submitting student sees: no internal review notes."""
    id: str
    subject: str
    description: str
    status: ComplaintStatus
    category: ComplaintCategory
    priority: ComplaintPriority
    remarks: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class ComplaintAdminView(ComplaintStudentView):
    student_id: str
    student_name: str
    review_notes: Optional[str] = None
    is_verified: Optional[bool] = None


class ComplaintReview(CamelModel):
    """Administrator draft: the only fields an administrator may change.

    Fields left out of a request keep their stored value.
    """
    status: ComplaintStatus
    remarks: Optional[str] = None
    review_notes: Optional[str] = None
    is_verified: Optional[bool] = None


class AIInsight(CamelModel):
    """Structured suggestion returned by the drafting model."""
    summary: str = Field(description="A summary of the core issue.")
    suggested_action: str = Field(description="A suggested resolution or immediate action step.")
    recommended_tone: str = Field(description="An appropriate tone for the response.")


class AIDraftResponse(CamelModel):
    suggestion_available: bool
    insight: Optional[AIInsight] = None
    draft: ComplaintReview


class StudentStats(CamelModel):
    total: int
    resolved: int


class AdminStats(CamelModel):
    total: int
    pending_action: int
    in_progress: int
    resolved: int
    by_category: Dict[str, int]
