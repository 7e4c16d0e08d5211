"""Commit Mirror Service"""

from typing import Any, Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, OwnershipError
from app.core.logging_config import get_logger
from app.models.commit import CommitModel
from app.models.repository import RepositoryModel
from app.repositories.commit_repository import CommitRepository
from app.repositories.repo_repository import RepositoryRepository
from app.services.github_client import GitHubClient, parse_github_datetime


logger = get_logger(__name__)


class CommitMirror:
    """
    Local copy of a repository's commits.

    Same policy as the repository mirror: one page is fetched the first time
    the list is requested and it is never refreshed.
    """

    def __init__(self, db_session: AsyncSession, github: GitHubClient):
        self.db = db_session
        self.github = github
        self.commits = CommitRepository(db_session)
        self.repositories = RepositoryRepository(db_session)

    async def list_for_repository(self, repository_id: str, user_id: str) -> List[CommitModel]:
        """
        Return the repository's commits, fetching them from GitHub if none are stored.

        Raises:
            OwnershipError: If the repository is missing or owned by someone else
            UpstreamError: If the GitHub call fails; nothing is persisted
        """
        repository = await self.repositories.find_by_id(repository_id, load=[RepositoryModel.owner])
        if repository is None or repository.owner_id != str(user_id):
            raise OwnershipError(
                "Repository not found or not owned by user",
                resource="Repository",
                resource_id=str(repository_id),
                user_id=str(user_id),
                context="commits.list"
            )

        repository_id = repository.id
        existing = await self.commits.find_all_by_repository_id(repository_id)
        if existing:
            return existing

        remote = await self.github.list_commits(repository.full_name, repository.owner.access_token)
        logger.info("commits_fetched", repository_id=repository_id, count=len(remote))

        try:
            commits = await self.commits.insert_many(
                self._to_model(item, repository_id) for item in remote
            )
            await self.db.commit()
        except IntegrityError:
            # Another request populated the list first
            await self.db.rollback()
            logger.warning("commits_populated_concurrently", repository_id=repository_id)
            return await self.commits.find_all_by_repository_id(repository_id)

        logger.info("commits_persisted", repository_id=repository_id, count=len(commits))
        return commits

    async def find_by_id(self, commit_id: str) -> Optional[CommitModel]:
        return await self.commits.find_by_id(commit_id, load=[CommitModel.repository])

    async def get_for_user(self, commit_id: str, user_id: str) -> CommitModel:
        """
        Fetch one commit whose repository is owned by ``user_id``.

        Raises:
            NotFoundError: If the commit does not exist
            OwnershipError: If its repository belongs to another user
        """
        commit = await self.find_by_id(commit_id)
        if commit is None:
            raise NotFoundError("Commit", commit_id, context="commits.get")
        if commit.repository.owner_id != str(user_id):
            raise OwnershipError(
                "Commit not owned by user",
                resource="Commit",
                resource_id=commit.id,
                user_id=str(user_id),
                context="commits.get"
            )
        return commit

    @staticmethod
    def _to_model(item: Dict[str, Any], repository_id: str) -> CommitModel:
        details = item.get("commit") or {}
        author = details.get("author") or {}
        return CommitModel(
            sha=item["sha"],
            message=details.get("message") or "",
            author_name=author.get("name"),
            author_email=author.get("email"),
            date=parse_github_datetime(author.get("date")),
            repository_id=repository_id,
            article_generated=False,
        )
