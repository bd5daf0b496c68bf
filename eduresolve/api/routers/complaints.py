# eduresolve/api/routers/complaints.py
from typing import List, Optional
from fastapi import APIRouter, Depends, status

from eduresolve.db.session import get_store
from eduresolve.db.store import RecordStore
from eduresolve.core.auth import require_student
from eduresolve.db.models import ComplaintStatus
from eduresolve.schemas.auth import TokenUser
from eduresolve.schemas.complaints import ComplaintCreate, ComplaintStudentView, StudentStats
from eduresolve.services.complaint_service import ComplaintService, student_stats

router = APIRouter()
complaint_service = ComplaintService()


@router.post("/", response_model=ComplaintStudentView, status_code=status.HTTP_201_CREATED)
async def file_complaint(
    *,
    store: RecordStore = Depends(get_store),
    complaint_in: ComplaintCreate,
    current_user: TokenUser = Depends(require_student),
):
    """
    File a new grievance. It starts in the Submitted status with no remarks.
    """
    return await complaint_service.submit_complaint(complaint_in, current_user, store)


@router.get("/", response_model=List[ComplaintStudentView])
async def list_my_complaints(
    status: Optional[ComplaintStatus] = None,
    store: RecordStore = Depends(get_store),
    current_user: TokenUser = Depends(require_student),
):
    """
    The current student's complaints, newest first.
    """
    return await complaint_service.list_for_student(current_user.id, store, status=status)


@router.get("/stats", response_model=StudentStats)
async def my_complaint_stats(
    store: RecordStore = Depends(get_store),
    current_user: TokenUser = Depends(require_student),
):
    complaints = await complaint_service.list_for_student(current_user.id, store)
    return student_stats(complaints)
