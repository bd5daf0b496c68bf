"""Complaint lifecycle: submission, review, filtering and dashboard counts.

Status assignment is free: an administrator may move a complaint from any
status to any other.
"""
import logging
from typing import Iterable, List, Optional

from eduresolve.db.models import (
    Complaint,
    ComplaintCategory,
    ComplaintStatus,
    utcnow,
)
from eduresolve.db.repositories.complaint_repo import complaint_repo
from eduresolve.db.store import RecordStore
from eduresolve.errors import ComplaintNotFound
from eduresolve.schemas.auth import TokenUser
from eduresolve.schemas.complaints import (
    AdminStats,
    AIInsight,
    ComplaintCreate,
    ComplaintReview,
    StudentStats,
)

logger = logging.getLogger(__name__)

PENDING_ACTION = (ComplaintStatus.SUBMITTED, ComplaintStatus.PENDING)


def newest_first(complaints: Iterable[Complaint]) -> List[Complaint]:
    return sorted(complaints, key=lambda c: c.created_at, reverse=True)


def filter_complaints(
    complaints: Iterable[Complaint],
    search: Optional[str] = None,
    status: Optional[ComplaintStatus] = None,
    category: Optional[ComplaintCategory] = None,
) -> List[Complaint]:
    needle = (search or "").lower()
    result = []
    for c in complaints:
        if needle and needle not in c.subject.lower() and needle not in c.student_name.lower():
            continue
        if status is not None and c.status != status:
            continue
        if category is not None and c.category != category:
            continue
        result.append(c)
    return result


def student_stats(complaints: List[Complaint]) -> StudentStats:
    return StudentStats(
        total=len(complaints),
        resolved=sum(1 for c in complaints if c.status == ComplaintStatus.RESOLVED),
    )


def admin_stats(complaints: List[Complaint]) -> AdminStats:
    by_category = {}
    for category in ComplaintCategory:
        count = sum(1 for c in complaints if c.category == category)
        if count > 0:
            by_category[category.value] = count

    return AdminStats(
        total=len(complaints),
        pending_action=sum(1 for c in complaints if c.status in PENDING_ACTION),
        in_progress=sum(1 for c in complaints if c.status == ComplaintStatus.IN_PROGRESS),
        resolved=sum(1 for c in complaints if c.status == ComplaintStatus.RESOLVED),
        by_category=by_category,
    )


def apply_suggestion(draft: ComplaintReview, insight: Optional[AIInsight]) -> ComplaintReview:
    """Fill the draft's remarks and review notes from an AI insight, if there is one."""
    if insight is None:
        return draft
    return draft.model_copy(update={
        "remarks": f"Based on initial review: {insight.summary}. Action: {insight.suggested_action}",
        "review_notes": f"AI Suggestion ({insight.recommended_tone}): {insight.suggested_action}",
    })


class ComplaintService:
    async def submit_complaint(
        self, complaint_in: ComplaintCreate, student: TokenUser, store: RecordStore
    ) -> Complaint:
        complaint = Complaint(
            student_id=student.id,
            student_name=student.name or student.email,
            subject=complaint_in.subject,
            description=complaint_in.description,
            status=ComplaintStatus.SUBMITTED,
            category=complaint_in.category,
            priority=complaint_in.priority,
            remarks="",
        )
        await store.add_complaint(complaint)
        logger.info(f"Complaint {complaint.id} submitted by {student.id}")
        return complaint

    async def list_for_student(
        self, student_id: str, store: RecordStore, status: Optional[ComplaintStatus] = None
    ) -> List[Complaint]:
        complaints = await store.list_complaints()
        own = [c for c in complaints if c.student_id == student_id]
        return newest_first(filter_complaints(own, status=status))

    async def list_all(
        self,
        store: RecordStore,
        search: Optional[str] = None,
        status: Optional[ComplaintStatus] = None,
        category: Optional[ComplaintCategory] = None,
    ) -> List[Complaint]:
        complaints = await store.list_complaints()
        return newest_first(filter_complaints(complaints, search, status, category))

    async def get_complaint(self, complaint_id: str, store: RecordStore) -> Complaint:
        complaint = await complaint_repo.get(store, id=complaint_id)
        if complaint is None:
            raise ComplaintNotFound(message=f"Complaint {complaint_id} not found")
        return complaint

    async def review_complaint(
        self, complaint_id: str, review: ComplaintReview, store: RecordStore
    ) -> Complaint:
        """Apply the fields an administrator sent and stamp updatedAt; createdAt is kept."""
        complaint = await self.get_complaint(complaint_id, store)
        changes = review.model_dump(exclude_unset=True, exclude_none=True)
        updated = complaint.model_copy(update={**changes, "updated_at": utcnow()})
        await store.update_complaint(updated)
        logger.info(f"Complaint {complaint_id} reviewed: {complaint.status.value} -> {review.status.value}")
        return updated
