from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from fastapi import Request
import logging

from eduresolve.core.config import settings

logger = logging.getLogger(__name__)


def create_engine(database_url: str) -> AsyncEngine:
    """Create the async engine backing the record store."""
    engine = create_async_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
    )
    logger.info("✅ Async engine created")
    return engine


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def build_store():
    """Construct the application's record store from settings."""
    from eduresolve.db.store import RecordStore

    return RecordStore(
        settings.DATABASE_URL_ASYNC,
        latency_ms=settings.STORE_LATENCY_MS,
        seed_samples=settings.SEED_SAMPLE_COMPLAINTS,
        admin_email=settings.SEED_ADMIN_EMAIL,
        admin_password=settings.SEED_ADMIN_PASSWORD,
    )


def get_store(request: Request):
    """FastAPI dependency returning the store built at startup."""
    return request.app.state.store
