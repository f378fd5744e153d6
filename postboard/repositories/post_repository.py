from typing import Sequence

from sqlalchemy import select

from postboard.models import Post
from postboard.repositories.base import SQLAlchemyRepository


class PostRepository(SQLAlchemyRepository[Post]):
    model = Post

    async def find_all_by_user(self, user_id: int) -> Sequence[Post]:
        q = select(Post).where(Post.user_id == user_id).order_by(Post.id)
        result = await self.db.execute(q)
        return result.scalars().all()
