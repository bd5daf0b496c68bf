from typing import Optional

from eduresolve.db.models import User
from eduresolve.db.repositories.base import BaseRepository
from eduresolve.db.store import RecordStore


class UserRepository(BaseRepository[User]):
    async def get_by_email(self, store: RecordStore, *, email: str) -> Optional[User]:
        for user in await self.loader(store):
            if user.email == email:
                return user
        return None

user_repo = UserRepository(RecordStore.list_users)
