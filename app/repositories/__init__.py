"""Data-access repositories, one per entity"""

from app.repositories.user_repository import UserRepository
from app.repositories.repo_repository import RepositoryRepository
from app.repositories.commit_repository import CommitRepository

__all__ = [
    "UserRepository",
    "RepositoryRepository",
    "CommitRepository",
]
