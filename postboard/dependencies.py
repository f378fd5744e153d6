from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db
from postboard.repositories import PostRepository, UserRepository
from postboard.services.post_service import PostService
from postboard.services.user_service import UserService


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """
    Build a UserService bound to the request's session.

    Usage in a router::

        @router.get("/users")
        async def list_users(service: UserService = Depends(get_user_service)):
            ...
    """
    return UserService(UserRepository(db))


def get_post_service(db: AsyncSession = Depends(get_db)) -> PostService:
    """
    Build a PostService bound to the request's session.

    Both repositories share the session, so the owner check and the post
    write are part of the same transaction.
    """
    return PostService(PostRepository(db), UserRepository(db))
