"""
Record store: users, complaints and the current session user, each kept as
one JSON document under a named key in the ``store_entry`` table.

Every collection operation reads the whole document, changes it in memory
and writes the whole document back. There is no locking; the last write
wins. This is only safe because one store serves one user at a time.
"""
import asyncio
import logging
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel

from eduresolve.db.models import Complaint, StoreEntry, User, utcnow
from eduresolve.db.session import create_engine, create_session_maker
from eduresolve.errors import StoreUnavailable

logger = logging.getLogger(__name__)

USERS_KEY = "cms_users"
COMPLAINTS_KEY = "cms_complaints"
SESSION_KEY = "cms_current_user"

RecordType = TypeVar("RecordType", bound=BaseModel)


def _dump(record: BaseModel) -> dict:
    return record.model_dump(mode="json", by_alias=True)


class RecordStore:
    def __init__(
        self,
        database_url: str,
        *,
        latency_ms: int = 0,
        seed_samples: bool = True,
        admin_email: str = "admin@university.com",
        admin_password: str = "admin",
    ):
        self.database_url = database_url
        self.latency = latency_ms / 1000
        self.seed_samples = seed_samples
        self.admin_email = admin_email
        self.admin_password = admin_password
        self._engine = create_engine(database_url)
        self._session_maker = create_session_maker(self._engine)

    # ---- medium ----

    async def _delay(self):
        if self.latency > 0:
            await asyncio.sleep(self.latency)

    async def _read(self, key: str) -> Any:
        try:
            async with self._session_maker() as session:
                entry = await session.get(StoreEntry, key)
                return entry.value if entry is not None else None
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to read '{key}': {e}")
            raise StoreUnavailable() from e

    async def _write(self, key: str, value: Any) -> None:
        try:
            async with self._session_maker() as session:
                entry = await session.get(StoreEntry, key)
                if entry is None:
                    session.add(StoreEntry(key=key, value=value))
                else:
                    entry.value = value
                    entry.updated_at = utcnow()
                    session.add(entry)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to write '{key}': {e}")
            raise StoreUnavailable() from e

    async def _remove(self, key: str) -> None:
        try:
            async with self._session_maker() as session:
                entry = await session.get(StoreEntry, key)
                if entry is not None:
                    await session.delete(entry)
                    await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to remove '{key}': {e}")
            raise StoreUnavailable() from e

    async def _has(self, key: str) -> bool:
        return await self._read(key) is not None

    async def _read_collection(self, key: str, model: Type[RecordType]) -> List[RecordType]:
        raw = await self._read(key) or []
        return [model.model_validate(item) for item in raw]

    async def _write_collection(self, key: str, records: List[BaseModel]) -> None:
        await self._write(key, [_dump(r) for r in records])

    # ---- lifecycle ----

    async def initialize(self) -> None:
        """Create the table and seed the collections on first use."""
        from eduresolve.db.seed import sample_admin, sample_complaints

        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to create store table: {e}")
            raise StoreUnavailable() from e

        if not await self._has(USERS_KEY):
            admin = sample_admin(self.admin_email, self.admin_password)
            await self._write_collection(USERS_KEY, [admin])
            logger.info(f"Seeded administrator {admin.email}")

        if not await self._has(COMPLAINTS_KEY):
            samples = sample_complaints() if self.seed_samples else []
            await self._write_collection(COMPLAINTS_KEY, samples)
            logger.info(f"Seeded {len(samples)} sample complaints")

    async def dispose(self) -> None:
        await self._engine.dispose()

    # ---- users ----

    async def list_users(self) -> List[User]:
        await self._delay()
        return await self._read_collection(USERS_KEY, User)

    async def add_user(self, user: User) -> None:
        await self._delay()
        users = await self._read_collection(USERS_KEY, User)
        users.append(user)
        await self._write_collection(USERS_KEY, users)

    # ---- complaints ----

    async def list_complaints(self) -> List[Complaint]:
        await self._delay()
        return await self._read_collection(COMPLAINTS_KEY, Complaint)

    async def add_complaint(self, complaint: Complaint) -> None:
        await self._delay()
        complaints = await self._read_collection(COMPLAINTS_KEY, Complaint)
        complaints.append(complaint)
        await self._write_collection(COMPLAINTS_KEY, complaints)

    async def update_complaint(self, updated: Complaint) -> None:
        """Replace the complaint with the same id. Does nothing if the id is unknown."""
        await self._delay()
        complaints = await self._read_collection(COMPLAINTS_KEY, Complaint)
        for index, complaint in enumerate(complaints):
            if complaint.id == updated.id:
                complaints[index] = updated
                await self._write_collection(COMPLAINTS_KEY, complaints)
                return
        logger.warning(f"update_complaint: no complaint with id {updated.id}")

    # ---- session ----

    async def get_session(self) -> Optional[User]:
        raw = await self._read(SESSION_KEY)
        return User.model_validate(raw) if raw else None

    async def set_session(self, user: Optional[User]) -> None:
        if user is None:
            await self._remove(SESSION_KEY)
        else:
            await self._write(SESSION_KEY, _dump(user))
