"""Repository Mirror Service"""

from typing import Any, Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, OwnershipError
from app.core.logging_config import get_logger
from app.models.repository import RepositoryModel
from app.models.user import UserModel
from app.repositories.repo_repository import RepositoryRepository
from app.services.github_client import GitHubClient


logger = get_logger(__name__)


class RepositoryMirror:
    """
    Local copy of a user's GitHub repositories.

    The list is fetched from GitHub once, the first time it is requested,
    and never refreshed afterwards.
    """

    def __init__(self, db_session: AsyncSession, github: GitHubClient):
        self.db = db_session
        self.github = github
        self.repositories = RepositoryRepository(db_session)

    async def list_for_user(self, user: UserModel) -> List[RepositoryModel]:
        """
        Return the user's repositories, fetching them from GitHub if none are stored.

        Raises:
            UpstreamError: If the GitHub call fails; nothing is persisted
        """
        owner_id = user.id
        existing = await self.repositories.find_all_by_owner_id(owner_id)
        if existing:
            return existing

        remote = await self.github.list_user_repositories(user.access_token)
        logger.info("repositories_fetched", user_id=owner_id, count=len(remote))

        try:
            repositories = await self.repositories.insert_many(
                self._to_model(item, owner_id) for item in remote
            )
            await self.db.commit()
        except IntegrityError:
            # Another request populated the list first
            await self.db.rollback()
            logger.warning("repositories_populated_concurrently", user_id=owner_id)
            return await self.repositories.find_all_by_owner_id(owner_id)

        logger.info("repositories_persisted", user_id=owner_id, count=len(repositories))
        return repositories

    async def find_by_id(self, repository_id: str) -> Optional[RepositoryModel]:
        return await self.repositories.find_by_id(repository_id)

    async def get_for_user(self, repository_id: str, user_id: str) -> RepositoryModel:
        """
        Fetch one repository owned by ``user_id``.

        Raises:
            NotFoundError: If the repository does not exist
            OwnershipError: If it belongs to another user
        """
        repository = await self.find_by_id(repository_id)
        if repository is None:
            raise NotFoundError("Repository", repository_id, context="repositories.get")
        self._ensure_owner(repository, user_id)
        return repository

    async def set_active(self, repository_id: str, user_id: str, active: bool) -> RepositoryModel:
        """Flip the activation flag of a repository owned by ``user_id``"""
        repository = await self.get_for_user(repository_id, user_id)

        await self.repositories.update(repository, is_active=active)
        await self.db.commit()

        logger.info(
            "repository_activation_changed",
            repository_id=repository.id,
            user_id=user_id,
            is_active=active
        )
        return repository

    @staticmethod
    def _ensure_owner(repository: RepositoryModel, user_id: str) -> None:
        if repository.owner_id != str(user_id):
            raise OwnershipError(
                "Repository not owned by user",
                resource="Repository",
                resource_id=repository.id,
                user_id=str(user_id),
                context="repositories.ownership"
            )

    @staticmethod
    def _to_model(item: Dict[str, Any], owner_id: str) -> RepositoryModel:
        return RepositoryModel(
            github_id=str(item["id"]),
            name=item["name"],
            full_name=item["full_name"],
            description=item.get("description"),
            url=item["html_url"],
            owner_id=owner_id,
            is_active=False,
        )
