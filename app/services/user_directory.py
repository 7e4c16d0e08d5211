"""User Directory Service"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import UserModel
from app.repositories.user_repository import UserRepository
from app.services.github_client import GitHubIdentity
from app.core.logging_config import get_logger


logger = get_logger(__name__)


class UserDirectory:
    """Local user records keyed by GitHub account id."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.users = UserRepository(db_session)

    async def upsert(self, identity: GitHubIdentity, access_token: str) -> UserModel:
        """
        Create or reuse the user for a GitHub identity.

        Profile fields are only written on creation. The access token is
        overwritten on every call; no token history is kept.
        """
        user = await self.users.find_by_github_id(identity.id)
        created = user is None

        if created:
            user = await self.users.insert(UserModel(
                github_id=identity.id,
                username=identity.login,
                email=identity.email,
                avatar_url=identity.avatar_url,
                access_token=access_token,
            ))
        else:
            await self.users.update(user, access_token=access_token)

        await self.db.commit()

        logger.info(
            "user_upserted",
            user_id=user.id,
            username=user.username,
            created=created
        )
        return user

    async def find_by_id(self, user_id: str) -> Optional[UserModel]:
        return await self.users.find_by_id(user_id)
