from fastapi import APIRouter, Depends, Response, status

from eduresolve.services.user_service import UserService
from eduresolve.core.auth import (
    create_access_token,
    get_current_user_dependency,
    set_access_cookie,
)
from eduresolve.db.session import get_store
from eduresolve.db.store import RecordStore
from eduresolve.schemas.auth import (
    LoginResponseModel,
    LogoutResponseModel,
    RegisterResponseModel,
    TokenUser,
    UserCreateModel,
    UserLoginModel,
    UserPublic,
)
from eduresolve.core.config import settings

router = APIRouter()
user_service = UserService()


# ==============================
# USER REGISTRATION ENDPOINT
# ==============================
@router.post("/register", response_model=RegisterResponseModel, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_in: UserCreateModel,
    store: RecordStore = Depends(get_store),
):
    """
    Register a new student.

    Steps:
    1. Check that the password confirmation matches.
    2. Check that the email is not already registered.
    3. Hash the password and append the user to the store.

    Returns:
        RegisterResponseModel: Status, message, and created user data.
    """
    created_user = await user_service.register_user(user_in, store)
    return RegisterResponseModel(
        status=True,
        message="Registration successful. Please sign in.",
        data=UserPublic.model_validate(created_user)
    )


# ==============================
# USER LOGIN ENDPOINT
# ==============================
@router.post("/login", response_model=LoginResponseModel)
async def login_for_access_token(
    form_data: UserLoginModel,
    response: Response,
    store: RecordStore = Depends(get_store),
):
    """
    Authenticate a user, make them the current session and return an access token.

    A wrong email or password is rejected with 401 and the session is left as it was.
    """
    user = await user_service.authenticate_user(form_data.email, form_data.password, store)
    access_token = create_access_token(user=user)
    set_access_cookie(response, access_token)
    return LoginResponseModel(
        status=True,
        message="User successfully logged in",
        access_token=access_token,
        data=UserPublic.model_validate(user),
    )


@router.post("/logout", response_model=LogoutResponseModel)
async def logout(
    response: Response,
    store: RecordStore = Depends(get_store),
    current_user: TokenUser = Depends(get_current_user_dependency(settings=settings)),
):
    """Clear the current session, when it belongs to the caller."""
    await user_service.logout(store, user_id=current_user.id)
    response.delete_cookie("access_token")
    return LogoutResponseModel(status=True, message="Signed out")


@router.get("/me", response_model=TokenUser)
async def read_current_user(
    current_user: TokenUser = Depends(get_current_user_dependency(settings=settings)),
):
    return current_user
