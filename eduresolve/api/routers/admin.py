# eduresolve/api/routers/admin.py
from fastapi import APIRouter, Depends
from typing import List, Optional

from eduresolve.db.session import get_store
from eduresolve.db.store import RecordStore
from eduresolve.core.auth import require_admin
from eduresolve.db.models import ComplaintCategory, ComplaintStatus
from eduresolve.db.repositories.user_repo import user_repo
from eduresolve.schemas.auth import TokenUser, UserPublic
from eduresolve.schemas.complaints import (
    AdminStats,
    AIDraftResponse,
    ComplaintAdminView,
    ComplaintReview,
)
from eduresolve.api.deps import pagination_params
from eduresolve.services.ai_service import ComplaintAnalyzer, get_analyzer
from eduresolve.services.complaint_service import ComplaintService, admin_stats, apply_suggestion

router = APIRouter()
complaint_service = ComplaintService()


@router.get("/users", response_model=List[UserPublic])
async def get_all_users(
    store: RecordStore = Depends(get_store),
    pagination: pagination_params = Depends(),
    current_admin: TokenUser = Depends(require_admin)
):
    """
    (Admin) Get a list of all users.
    """
    users = await user_repo.get_all(store, skip=pagination.skip, limit=pagination.limit)
    return [UserPublic.model_validate(u) for u in users]


@router.get("/complaints", response_model=List[ComplaintAdminView])
async def get_all_complaints(
    search: Optional[str] = None,
    status: Optional[ComplaintStatus] = None,
    category: Optional[ComplaintCategory] = None,
    store: RecordStore = Depends(get_store),
    pagination: pagination_params = Depends(),
    current_admin: TokenUser = Depends(require_admin)
):
    """
    (Admin) All complaints, newest first.

    `search` matches subject or student name (case-insensitive); `status` and
    `category` must match exactly.
    """
    complaints = await complaint_service.list_all(store, search=search, status=status, category=category)
    return complaints[pagination.skip:pagination.skip + pagination.limit]


@router.get("/complaints/{complaint_id}", response_model=ComplaintAdminView)
async def get_complaint(
    complaint_id: str,
    store: RecordStore = Depends(get_store),
    current_admin: TokenUser = Depends(require_admin)
):
    return await complaint_service.get_complaint(complaint_id, store)


@router.patch("/complaints/{complaint_id}", response_model=ComplaintAdminView)
async def review_complaint(
    complaint_id: str,
    review: ComplaintReview,
    store: RecordStore = Depends(get_store),
    current_admin: TokenUser = Depends(require_admin)
):
    """
    (Admin) Set status, remarks, review notes and the verified flag.
    """
    return await complaint_service.review_complaint(complaint_id, review, store)


@router.post("/complaints/{complaint_id}/ai-draft", response_model=AIDraftResponse)
async def ai_draft(
    complaint_id: str,
    draft: ComplaintReview,
    store: RecordStore = Depends(get_store),
    analyzer: ComplaintAnalyzer = Depends(get_analyzer),
    current_admin: TokenUser = Depends(require_admin)
):
    """
    (Admin) Ask the AI assistant to pre-fill remarks and review notes.

    Nothing is saved. When no suggestion is available the draft comes back
    exactly as sent.
    """
    complaint = await complaint_service.get_complaint(complaint_id, store)
    insight = await analyzer.analyze(complaint.subject, complaint.description)
    return AIDraftResponse(
        suggestion_available=insight is not None,
        insight=insight,
        draft=apply_suggestion(draft, insight),
    )


@router.get("/stats", response_model=AdminStats)
async def get_stats(
    store: RecordStore = Depends(get_store),
    current_admin: TokenUser = Depends(require_admin)
):
    complaints = await store.list_complaints()
    return admin_stats(complaints)
