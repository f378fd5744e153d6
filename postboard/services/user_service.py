"""
User service: CRUD for the User aggregate with email-uniqueness checks.

Design notes
------------
- Email comparison is an exact string match, so addresses that differ
  only in letter case belong to different users.
- The uniqueness check and the following write run in the request's
  transaction (``get_db``).  The unique constraint on ``users.email``
  catches the insert that slips past the check under a concurrent race;
  its ``IntegrityError`` is reported as ``DuplicateEmail`` as well.
- Deleting a user does not look at that user's posts.  Those posts keep
  their ``user_id`` and stay readable.
"""
import logging

from sqlalchemy.exc import IntegrityError

from postboard.exceptions import DuplicateEmail, require_id, translate_persistence_errors
from postboard.models import User
from postboard.repositories import UserRepository
from postboard.schemas import UserRequest, UserResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Mapping helpers
# ---------------------------------------------------------------------------

def _to_entity(data: UserRequest) -> User:
    return User(name=data.name, email=data.email)


def _to_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class UserService:
    def __init__(self, users: UserRepository) -> None:
        self.users = users

    async def _save_checked(self, user: User) -> User:
        # Race fallback: another transaction took the email after our check.
        # Read the email first; a failed flush expires the instance.
        email = user.email
        try:
            return await self.users.save(user)
        except IntegrityError as exc:
            logger.error("Unique constraint rejected email %s: %s", email, exc.orig)
            raise DuplicateEmail(email) from exc

    @translate_persistence_errors("create user")
    async def create_user(self, data: UserRequest) -> UserResponse:
        """
        Persist a new user.

        Raises DuplicateEmail when any existing user already has the same
        email; nothing is written in that case.
        """
        email = data.email
        logger.info("Creating user with email: %s", email)

        if await self.users.find_by_email(email) is not None:
            logger.error("Rejected user creation, email already in use: %s", email)
            raise DuplicateEmail(email)

        user = await self._save_checked(_to_entity(data))
        logger.info("User created successfully with ID: %s", user.id)
        return _to_response(user)

    @translate_persistence_errors("fetch users")
    async def get_users(self) -> list[UserResponse]:
        """Return every user in insertion order."""
        logger.info("Fetching all users")
        return [_to_response(u) for u in await self.users.find_all()]

    @translate_persistence_errors("fetch user")
    async def get_user(self, user_id: int | None) -> UserResponse | None:
        """Return the user, or None when no user has *user_id*."""
        require_id(user_id, "User")
        logger.info("Fetching user with ID: %s", user_id)
        user = await self.users.find_by_id(user_id)
        return _to_response(user) if user is not None else None

    @translate_persistence_errors("update user")
    async def update_user(self, user_id: int | None, data: UserRequest) -> UserResponse | None:
        """
        Overwrite the name and email of an existing user.

        Returns None when the user does not exist.  Raises DuplicateEmail
        only when the email actually changes to one another user holds;
        re-submitting the current email is always accepted.
        """
        require_id(user_id, "User")
        logger.info("Updating user with ID: %s", user_id)

        user = await self.users.find_by_id(user_id)
        if user is None:
            logger.warning("User with ID %s not found for update", user_id)
            return None

        email = data.email
        if email != user.email and await self.users.find_by_email(email) is not None:
            logger.error("Rejected update of user %s, email already in use: %s", user_id, email)
            raise DuplicateEmail(email)

        user.name = data.name
        user.email = email
        user = await self._save_checked(user)
        logger.info("User updated successfully with ID: %s", user.id)
        return _to_response(user)

    @translate_persistence_errors("delete user")
    async def delete_user(self, user_id: int | None) -> bool:
        """
        Delete the user identified by *user_id*.

        Returns True on success, False when the user does not exist.  The
        user's posts are left untouched and keep pointing at the old id.
        """
        require_id(user_id, "User")
        logger.info("Deleting user with ID: %s", user_id)

        if not await self.users.exists_by_id(user_id):
            logger.warning("User with ID %s not found for deletion", user_id)
            return False

        await self.users.delete_by_id(user_id)
        logger.info("User deleted successfully with ID: %s", user_id)
        return True
