from typing import Optional

from fastapi import APIRouter, Depends

from eduresolve.core.auth import get_optional_user_dependency
from eduresolve.core.config import settings
from eduresolve.db.models import UserRole
from eduresolve.db.session import get_store
from eduresolve.db.store import RecordStore
from eduresolve.schemas.auth import SessionStateModel, TokenUser, UserPublic
from eduresolve.services.user_service import UserService

router = APIRouter()
user_service = UserService()


@router.get("", response_model=SessionStateModel)
async def read_session(
    store: RecordStore = Depends(get_store),
    caller: Optional[TokenUser] = Depends(get_optional_user_dependency(settings=settings)),
):
    """
    Session gate: tells the client which dashboard to open.

    The caller's own token (bearer or cookie) must belong to the stored
    session user. Anyone else, including a caller with no token, is sent to
    login/registration. No new token is issued here.
    """
    user = await user_service.session_for(caller, store)
    if user is None:
        return SessionStateModel(authenticated=False, view="login")

    return SessionStateModel(
        authenticated=True,
        view="admin" if user.role == UserRole.ADMIN else "student",
        user=UserPublic.model_validate(user),
        access_token=caller.access_token,
    )
