"""
Test infrastructure for the Postboard API.

Strategy
--------
- SQLite in-memory via aiosqlite; no Postgres needed in CI.
- StaticPool makes every session share the one in-memory connection
  (an in-memory SQLite database is private to its connection).
- The app's get_db dependency is overridden so requests use the test
  session factory and keep the commit-or-rollback transaction boundary.
- Tables are created before and dropped after every test, which also
  resets SQLite's AUTOINCREMENT counters, so the first user/post of a test
  always gets id 1.
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from postboard.database import Base, get_db, session_scope
from postboard.main import app
from postboard.middleware import install_query_counter
from postboard.repositories import PostRepository, UserRepository
from postboard.services.post_service import PostService
from postboard.services.user_service import UserService

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Dependency override: replace production get_db with the test session factory
# ---------------------------------------------------------------------------

async def override_get_db():
    async with session_scope(async_session_test) as session:
        yield session


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A live session for tests that drive the services directly."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def user_service(db_session: AsyncSession) -> UserService:
    return UserService(UserRepository(db_session))


@pytest_asyncio.fixture
async def post_service(db_session: AsyncSession) -> PostService:
    return PostService(PostRepository(db_session), UserRepository(db_session))


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """An httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def session_factory() -> async_sessionmaker[AsyncSession]:
    """The test session factory, for code that opens its own sessions."""
    return async_session_test
