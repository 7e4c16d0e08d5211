"""Generic data-access object over an AsyncSession"""

from typing import Any, Generic, Iterable, List, Optional, Sequence, Type, TypeVar
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.base import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


class SQLAlchemyRepository(Generic[ModelT]):
    """
    Per-entity data access: ``find_by_id``, ``find_many``, ``insert``,
    ``insert_many`` and ``update``.

    Writes are flushed, not committed; services own the transaction.
    """

    model: Type[ModelT]

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def find_by_id(self, id: str, load: Sequence[Any] = ()) -> Optional[ModelT]:
        stmt = select(self.model).where(self.model.id == str(id))
        if load:
            stmt = stmt.options(*(selectinload(relation) for relation in load))
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def find_one(self, **filters: Any) -> Optional[ModelT]:
        result = await self.db.execute(select(self.model).filter_by(**filters))
        return result.scalars().first()

    async def find_many(self, load: Sequence[Any] = (), **filters: Any) -> List[ModelT]:
        stmt = select(self.model).filter_by(**filters)
        if load:
            stmt = stmt.options(*(selectinload(relation) for relation in load))
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def insert(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        await self.db.flush()
        return entity

    async def insert_many(self, entities: Iterable[ModelT]) -> List[ModelT]:
        """Stage every row then flush once"""
        staged = list(entities)
        self.db.add_all(staged)
        await self.db.flush()
        return staged

    async def update(self, entity: ModelT, **values: Any) -> ModelT:
        for key, value in values.items():
            setattr(entity, key, value)
        await self.db.flush()
        return entity
