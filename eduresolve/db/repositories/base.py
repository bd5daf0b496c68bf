from typing import Awaitable, Callable, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from eduresolve.db.store import RecordStore

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """Read helpers over one collection of the record store."""

    def __init__(self, loader: Callable[[RecordStore], Awaitable[List[ModelType]]]):
        self.loader = loader

    async def get(self, store: RecordStore, id: str) -> Optional[ModelType]:
        for item in await self.loader(store):
            if item.id == id:
                return item
        return None

    async def get_all(self, store: RecordStore, *, skip: int = 0, limit: int = 100) -> List[ModelType]:
        items = await self.loader(store)
        return items[skip:skip + limit]
