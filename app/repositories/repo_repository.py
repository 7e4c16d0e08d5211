from typing import List

from sqlalchemy import select

from app.models.repository import RepositoryModel
from app.repositories.base import SQLAlchemyRepository


class RepositoryRepository(SQLAlchemyRepository[RepositoryModel]):
    model = RepositoryModel

    async def find_all_by_owner_id(self, owner_id: str) -> List[RepositoryModel]:
        stmt = (
            select(RepositoryModel)
            .where(RepositoryModel.owner_id == str(owner_id))
            .order_by(RepositoryModel.created_at, RepositoryModel.full_name)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
