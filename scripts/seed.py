"""Seed the database with demo users and posts through the service layer.

Re-running without ``--reset`` is safe: users whose email is already present
are skipped together with their posts.
"""
import argparse
import asyncio
import logging
import time

from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import Base, engine, session_scope
from postboard.logging_config import configure_logging
from postboard.repositories import PostRepository, UserRepository
from postboard.schemas import PostRequest, UserRequest
from postboard.services.post_service import PostService
from postboard.services.user_service import UserService

logger = logging.getLogger("seed")

TOPICS = ["python", "fastapi", "postgresql", "sqlalchemy", "docker", "testing",
          "asyncio", "pydantic", "alembic", "rest-api"]


def seed_email(i: int) -> str:
    return f"user_{i:04d}@example.com"


async def seed_rows(session: AsyncSession, num_users: int, posts_per_user: int) -> tuple[int, int]:
    """Create the demo rows in *session*; return (users created, posts created)."""
    user_repo = UserRepository(session)
    users = UserService(user_repo)
    posts = PostService(PostRepository(session), user_repo)
    created_users = created_posts = 0

    for i in range(num_users):
        email = seed_email(i)
        if await user_repo.find_by_email(email) is not None:
            logger.info("Skipping existing user %s", email)
            continue
        user = await users.create_user(UserRequest(name=f"User {i}", email=email))
        created_users += 1
        for j in range(posts_per_user):
            topic = TOPICS[(i + j) % len(TOPICS)]
            await posts.create_post(
                user.id,
                PostRequest(
                    title=f"Notes on {topic} #{j}",
                    content=f"{user.name} writes about {topic}. " * 5,
                ),
            )
            created_posts += 1

    return created_users, created_posts


async def seed(num_users: int, posts_per_user: int, reset: bool) -> None:
    start = time.perf_counter()

    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with session_scope() as session:
        created_users, created_posts = await seed_rows(session, num_users, posts_per_user)

    logger.info(
        "Seeded %d users and %d posts in %.1fs",
        created_users, created_posts, time.perf_counter() - start,
    )
    await engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Seed the Postboard database")
    parser.add_argument("--users", type=int, default=10, help="Number of users to create")
    parser.add_argument("--posts-per-user", type=int, default=3, help="Posts created for each user")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    args = parser.parse_args()
    configure_logging()
    asyncio.run(seed(args.users, args.posts_per_user, args.reset))


if __name__ == "__main__":
    main()
