from typing import Optional

from app.models.user import UserModel
from app.repositories.base import SQLAlchemyRepository


class UserRepository(SQLAlchemyRepository[UserModel]):
    model = UserModel

    async def find_by_github_id(self, github_id: str) -> Optional[UserModel]:
        return await self.find_one(github_id=str(github_id))
