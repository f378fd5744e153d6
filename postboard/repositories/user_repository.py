from sqlalchemy import select

from postboard.models import User
from postboard.repositories.base import SQLAlchemyRepository


class UserRepository(SQLAlchemyRepository[User]):
    model = User

    async def find_by_email(self, email: str) -> User | None:
        """Exact, case-sensitive match on the stored address."""
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
