from datetime import datetime, timezone
from typing import List

from eduresolve.core.auth import generate_passwd_hash
from eduresolve.db.models import (
    Complaint,
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
    User,
    UserRole,
)


def sample_admin(email: str, password: str) -> User:
    return User(
        id="admin-001",
        name="System Administrator",
        email=email,
        hashed_password=generate_passwd_hash(password),
        role=UserRole.ADMIN,
    )


def sample_complaints() -> List[Complaint]:
    return [
        Complaint(
            id="C-001",
            student_id="stud-001",
            student_name="gopi",
            subject="Food Quality is Bad",
            description="The food served in the mess is of very poor quality recently.",
            status=ComplaintStatus.UNDER_REVIEW,
            category=ComplaintCategory.HOSTEL,
            priority=ComplaintPriority.MEDIUM,
            remarks="",
            created_at=datetime(2026, 1, 29, 22, 29, 34, tzinfo=timezone.utc),
        ),
        Complaint(
            id="C-002",
            student_id="stud-002",
            student_name="Arya",
            subject="Lavanya",
            description="Staff behavior issue during library hours.",
            status=ComplaintStatus.UNDER_REVIEW,
            category=ComplaintCategory.STAFF,
            priority=ComplaintPriority.LOW,
            remarks="",
            created_at=datetime(2025, 12, 30, 20, 34, 34, tzinfo=timezone.utc),
        ),
    ]
