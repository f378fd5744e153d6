# Repositories package.
#
# The persistence layer the services talk to.  Each repository wraps the
# request-scoped AsyncSession and exposes the small capability set the
# services need:
#
#   SQLAlchemyRepository  save / find_by_id / exists_by_id / find_all / delete_by_id
#   UserRepository        + find_by_email
#   PostRepository        + find_all_by_user
#
# Repositories flush but never commit; the transaction belongs to ``get_db``.
from postboard.repositories.base import SQLAlchemyRepository
from postboard.repositories.post_repository import PostRepository
from postboard.repositories.user_repository import UserRepository

__all__ = ["SQLAlchemyRepository", "PostRepository", "UserRepository"]
