from typing import Generic, Sequence, TypeVar

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class SQLAlchemyRepository(Generic[ModelT]):
    """
    Id-keyed persistence for a single mapped class.

    Results are always ordered by primary key, which for autoincrement ids
    is insertion order.
    """

    model: type[ModelT]

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def save(self, entity: ModelT) -> ModelT:
        """Insert or update *entity* and flush so its id is populated."""
        self.db.add(entity)
        await self.db.flush()
        return entity

    async def find_by_id(self, entity_id: int) -> ModelT | None:
        return await self.db.get(self.model, entity_id)

    async def exists_by_id(self, entity_id: int) -> bool:
        q = select(exists().where(self.model.id == entity_id))
        return bool(await self.db.scalar(q))

    async def find_all(self) -> Sequence[ModelT]:
        result = await self.db.execute(select(self.model).order_by(self.model.id))
        return result.scalars().all()

    async def delete_by_id(self, entity_id: int) -> None:
        await self.db.execute(delete(self.model).where(self.model.id == entity_id))
