"""
Typed service errors and the database-error translation decorator.

Each error carries a stable dotted ``code`` and the HTTP status the API
layer answers with, so a single FastAPI exception handler (see
``postboard.main``) can turn any of them into a JSON response.
"""
from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ServiceError(Exception):
    """Base class for failures a service reports to its caller."""

    code: str = "service.error"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_public_dict(self) -> dict[str, Any]:
        # ``detail`` matches the shape of FastAPI's own error bodies.
        return {"detail": self.message, "code": self.code}


class InvalidArgument(ServiceError):
    """A required identifier argument was missing."""

    code = "request.invalid_argument"
    status_code = 400


class NotFound(ServiceError):
    """A referenced entity does not exist."""

    code = "resource.not_found"
    status_code = 404


class DuplicateEmail(ServiceError):
    code = "user.duplicate_email"
    status_code = 409

    def __init__(self, email: str) -> None:
        super().__init__(f"User with email {email} already exists")
        self.email = email


class PersistenceFailure(ServiceError):
    """The database reported an error; the original is chained as ``__cause__``."""

    code = "persistence.failure"
    status_code = 500


def require_id(value: int | None, label: str) -> int:
    """Return *value*, or raise InvalidArgument when it is None."""
    if value is None:
        message = f"{label} ID cannot be null"
        logger.error("Invalid argument: %s", message)
        raise InvalidArgument(message)
    return value


def translate_persistence_errors(
    action: str,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorate an async service method so that any ``SQLAlchemyError`` it
    raises is logged and re-raised as ``PersistenceFailure``.

    ``ServiceError`` subclasses are not database errors and pass through
    unchanged.  *action* completes the sentence "Failed to ...".
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as exc:
                logger.error("Database error while trying to %s: %s", action, exc)
                raise PersistenceFailure(f"Failed to {action} due to database error") from exc

        return wrapper

    return decorator
