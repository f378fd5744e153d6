"""
Regression tests for behaviour that is easy to "fix" by accident.

1. Deleting a user leaves that user's posts in place (dangling owner).
2. The unique constraint still yields 409 when the service-level email
   check is bypassed (concurrent insert race).
3. Database errors surface as a 500 ``persistence.failure`` body, with the
   original SQLAlchemy error chained on the service exception.
4. session_scope commits on success and rolls back on error.
5. Seeding twice without a reset skips the users that already exist.
"""
import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from postboard.database import session_scope
from postboard.exceptions import DuplicateEmail, PersistenceFailure
from postboard.models import User
from postboard.repositories import PostRepository, UserRepository
from postboard.schemas import UserRequest
from postboard.services.user_service import UserService
from scripts.seed import seed_email, seed_rows


async def _fail(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("database is unavailable"))


async def _no_match(self, email):
    return None


# ---------------------------------------------------------------------------
# 1. User deletion does not cascade to posts
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_deleting_user_leaves_posts_dangling(async_client: AsyncClient):
    user_id = (await async_client.post("/api/v1/users", json={
        "name": "Leaving", "email": "leaving@example.com",
    })).json()["id"]
    post = (await async_client.post(f"/api/v1/posts/users/{user_id}", json={
        "title": "Left behind", "content": "Still here",
    })).json()

    assert (await async_client.delete(f"/api/v1/users/{user_id}")).status_code == 204

    resp = await async_client.get(f"/api/v1/posts/{post['id']}")
    assert resp.status_code == 200
    assert resp.json()["user_id"] == user_id

    # The owner is gone, so listing by owner is a 404 even though the post exists.
    assert (await async_client.get(f"/api/v1/posts/users/{user_id}")).status_code == 404
    # Updates still work because only the post itself is checked.
    updated = await async_client.put(f"/api/v1/posts/{post['id']}", json={
        "title": "Edited", "content": "Still here",
    })
    assert updated.status_code == 200


# ---------------------------------------------------------------------------
# 2. Unique constraint backs the email check
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_unique_constraint_reported_as_duplicate_email(user_service: UserService, monkeypatch):
    await user_service.create_user(UserRequest(name="First", email="race@example.com"))
    monkeypatch.setattr(UserRepository, "find_by_email", _no_match)

    with pytest.raises(DuplicateEmail):
        await user_service.create_user(UserRequest(name="Second", email="race@example.com"))


@pytest.mark.asyncio
async def test_unique_constraint_returns_409(async_client: AsyncClient, monkeypatch):
    await async_client.post("/api/v1/users", json={"name": "First", "email": "race@example.com"})
    monkeypatch.setattr(UserRepository, "find_by_email", _no_match)

    resp = await async_client.post("/api/v1/users", json={"name": "Second", "email": "race@example.com"})
    assert resp.status_code == 409


# ---------------------------------------------------------------------------
# 3. Database errors are wrapped, not swallowed
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_database_error_wrapped_in_service(user_service: UserService, monkeypatch):
    monkeypatch.setattr(UserRepository, "find_all", _fail)

    with pytest.raises(PersistenceFailure) as exc_info:
        await user_service.get_users()

    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert str(exc_info.value) == "Failed to fetch users due to database error"


@pytest.mark.asyncio
async def test_database_error_returns_500(async_client: AsyncClient, monkeypatch):
    monkeypatch.setattr(PostRepository, "find_all", _fail)

    resp = await async_client.get("/api/v1/posts")
    assert resp.status_code == 500
    assert resp.json() == {
        "detail": "Failed to fetch posts due to database error",
        "code": "persistence.failure",
    }


# ---------------------------------------------------------------------------
# 4. Transaction scope
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_session_scope_commits_on_success(session_factory):
    async with session_scope(session_factory) as session:
        await UserRepository(session).save(User(name="Kept", email="kept@example.com"))

    async with session_factory() as session:
        assert await UserRepository(session).find_by_email("kept@example.com") is not None


@pytest.mark.asyncio
async def test_session_scope_rolls_back_on_error(session_factory):
    with pytest.raises(RuntimeError):
        async with session_scope(session_factory) as session:
            await UserRepository(session).save(User(name="Lost", email="lost@example.com"))
            raise RuntimeError("handler failed")

    async with session_factory() as session:
        assert await UserRepository(session).find_by_email("lost@example.com") is None


# ---------------------------------------------------------------------------
# 5. Seeding is repeatable
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_seed_twice_skips_existing_users(session_factory):
    async with session_scope(session_factory) as session:
        assert await seed_rows(session, num_users=3, posts_per_user=2) == (3, 6)

    async with session_scope(session_factory) as session:
        assert await seed_rows(session, num_users=4, posts_per_user=2) == (1, 2)

    async with session_factory() as session:
        users = await UserRepository(session).find_all()
        posts = await PostRepository(session).find_all()
    assert [u.email for u in users] == [seed_email(i) for i in range(4)]
    assert len(posts) == 8
