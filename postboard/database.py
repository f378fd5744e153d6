from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from postboard.config import settings
from postboard.middleware import install_query_counter

# Module-level engine variable allows tests to override with a test engine.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=settings.DB_POOL_PRE_PING,
)

# Register the per-request SQL query counter on the production engine.
install_query_counter(engine)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession] = async_session,
) -> AsyncIterator[AsyncSession]:
    """
    Open a session whose whole lifetime is one transaction.

    Commits when the block exits normally and rolls back when it raises, so
    a service's check (email taken? owner exists?) and the write that
    follows it are committed together or not at all.
    """
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one ``session_scope`` per request."""
    async with session_scope() as session:
        yield session
