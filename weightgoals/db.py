"""Async database access for reading imported weight samples."""

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from weightgoals.config import settings

_ASYNC_SCHEME = "postgresql+asyncpg://"


def async_database_url(url: str) -> str:
    """Point plain postgres URLs (as issued by most hosts) at the asyncpg driver."""
    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            return _ASYNC_SCHEME + url[len(scheme):]
    return url


engine = create_async_engine(async_database_url(settings.database_url), pool_pre_ping=True)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncIterator[AsyncSession]:
    # Goal endpoints only read; anything left open is rolled back.
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.rollback()
