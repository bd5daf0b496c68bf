import logging
from typing import Optional

from eduresolve.db.models import User, UserRole
from eduresolve.db.repositories.user_repo import user_repo
from eduresolve.db.store import RecordStore
from eduresolve.errors import (
    UserAlreadyExists,
    InvalidCredentials,
    PasswordMismatch,
    StoreUnavailable,
)
from eduresolve.schemas.auth import TokenUser, UserCreateModel
from eduresolve.core.auth import generate_passwd_hash, verify_password

logger = logging.getLogger(__name__)


class UserService:
    async def user_exists(self, email: str, store: RecordStore) -> bool:
        """Check if a user with the given email already exists."""
        user = await user_repo.get_by_email(store, email=email)
        return user is not None

    async def register_user(self, user_data: UserCreateModel, store: RecordStore) -> User:
        """Register a new student account."""
        if user_data.password != user_data.confirm_password:
            raise PasswordMismatch()

        if await self.user_exists(user_data.email, store):
            raise UserAlreadyExists()

        new_user = User(
            name=user_data.name,
            email=user_data.email,
            hashed_password=generate_passwd_hash(user_data.password),
            role=UserRole.STUDENT,
        )
        try:
            await store.add_user(new_user)
        except StoreUnavailable as e:
            raise StoreUnavailable(message="Registration failed. Please try again.") from e

        logger.info(f"Created user {new_user.id}")
        return new_user

    async def authenticate_user(self, email: str, password: str, store: RecordStore) -> User:
        """Check the credentials and make the user the current session."""
        user = await user_repo.get_by_email(store, email=email)
        if user is None or not verify_password(password, user.hashed_password):
            raise InvalidCredentials()

        await store.set_session(user)
        logger.info(f"User {user.id} logged in as {user.role.value}")
        return user

    async def logout(self, store: RecordStore, user_id: Optional[str] = None) -> None:
        """Clear the session; with `user_id`, only when that user holds it."""
        if user_id is not None:
            current = await store.get_session()
            if current is None or current.id != user_id:
                logger.info(f"Logout by {user_id} left the session of another user in place")
                return
        await store.set_session(None)

    async def session_for(self, caller: Optional[TokenUser], store: RecordStore) -> Optional[User]:
        """The stored session user, but only for the caller who holds it."""
        if caller is None:
            return None
        user = await store.get_session()
        if user is None or user.id != caller.id:
            return None
        return user
