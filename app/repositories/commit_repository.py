from typing import List

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.models.commit import CommitModel
from app.models.repository import RepositoryModel
from app.repositories.base import SQLAlchemyRepository


class CommitRepository(SQLAlchemyRepository[CommitModel]):
    model = CommitModel

    async def find_all_by_repository_id(self, repository_id: str) -> List[CommitModel]:
        stmt = (
            select(CommitModel)
            .where(CommitModel.repository_id == str(repository_id))
            .order_by(CommitModel.date.desc(), CommitModel.sha)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def find_generated_by_owner_id(self, owner_id: str) -> List[CommitModel]:
        """Generated articles across every repository of one owner, repository eager-loaded"""
        stmt = (
            select(CommitModel)
            .join(CommitModel.repository)
            .where(
                RepositoryModel.owner_id == str(owner_id),
                CommitModel.article_generated.is_(True)
            )
            .options(selectinload(CommitModel.repository))
            .order_by(CommitModel.updated_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
