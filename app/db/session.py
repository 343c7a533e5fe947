"""Async engine, session factory and the FastAPI DB dependency."""
import logging
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()

settings = get_settings()


def _engine_kwargs(url: str) -> dict:
    # SQLite files don't drop connections; other backends may
    if url.startswith("sqlite"):
        return {}
    return {"pool_pre_ping": True}


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_kwargs(settings.database_url),
)

AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    """One session per request; closed when the response is done."""
    async with AsyncSessionLocal() as db:
        yield db
