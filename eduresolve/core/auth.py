# eduresolve/core/auth.py
import logging
from datetime import datetime, timedelta, timezone
import jwt
from passlib.context import CryptContext
from fastapi import Request, Depends, Response
from fastapi.security import OAuth2PasswordBearer
from typing import Optional

from eduresolve.schemas.auth import TokenUser
from eduresolve.core.config import settings, Settings
from eduresolve.db.models import UserRole
from eduresolve.errors import UnAuthenticated, InvalidToken, InsufficientPermission


passwd_context = CryptContext(schemes=["bcrypt"])
logger = logging.getLogger(__name__)


class OptionalOAuth2Scheme(OAuth2PasswordBearer):
    async def __call__(self, request: Request) -> Optional[str]:
        try:
            return await super().__call__(request)
        except Exception:
            return None

optional_oauth2_scheme = OptionalOAuth2Scheme(tokenUrl=f"{settings.API_V1_STR}/auth/login")


def generate_passwd_hash(password: str) -> str:
    return passwd_context.hash(password)


def verify_password(password: str, hash: str) -> bool:
    return passwd_context.verify(password, hash)


def decode_token(token: str, settings: Settings) -> dict:
    return jwt.decode(
        jwt=token, key=settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
    )


def create_access_token(user, expires_delta: timedelta | None = None) -> str:
    to_encode = {
        "sub": user.email,
        "id": str(user.id),
        "name": user.name,
        "role": user.role.value if isinstance(user.role, UserRole) else user.role,
        "exp": datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def set_access_cookie(response: Response, access_token: str):
    response.set_cookie(
        key="access_token",
        value=access_token,
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="none",
        secure=True,
    )


def token_user_from(access_token: str, settings: Settings) -> TokenUser:
    """Decode an access token into the user it was issued to."""
    try:
        payload = decode_token(access_token, settings)
    except jwt.ExpiredSignatureError:
        raise InvalidToken()
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected token: {e}")
        raise UnAuthenticated()

    email = payload.get("sub")
    user_id = payload.get("id")
    if not email or not user_id:
        raise UnAuthenticated()

    return TokenUser(
        id=user_id,
        name=payload.get("name"),
        email=email,
        role=payload.get("role"),
        access_token=access_token,
        token_type="bearer",
    )


def get_current_user_dependency(settings: Settings):
    def get_current_user(
        request: Request,
        token: Optional[str] = Depends(optional_oauth2_scheme),
    ) -> TokenUser:
        access_token = token or request.cookies.get("access_token")

        if not access_token:
            raise UnAuthenticated()

        return token_user_from(access_token, settings)

    return get_current_user


def get_optional_user_dependency(settings: Settings):
    """Like get_current_user_dependency, but an absent or bad token gives None."""
    def get_optional_user(
        request: Request,
        token: Optional[str] = Depends(optional_oauth2_scheme),
    ) -> Optional[TokenUser]:
        access_token = token or request.cookies.get("access_token")
        if not access_token:
            return None
        try:
            return token_user_from(access_token, settings)
        except (UnAuthenticated, InvalidToken):
            return None

    return get_optional_user


# Role-based access control dependencies
def require_role(required_role: UserRole):
    """Dependency factory for requiring a specific user role."""
    def role_checker(current_user: TokenUser = Depends(get_current_user_dependency(settings=settings))) -> TokenUser:
        if current_user.role != required_role:
            raise InsufficientPermission(
                message=f"Operation not permitted. Requires '{required_role.value}' role."
            )
        return current_user
    return role_checker

require_admin = require_role(UserRole.ADMIN)
require_student = require_role(UserRole.STUDENT)
