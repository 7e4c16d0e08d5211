"""SQLAlchemy models for Lucent"""

from app.models.base import Base
from app.models.user import UserModel
from app.models.repository import RepositoryModel
from app.models.commit import CommitModel

__all__ = [
    "Base",
    "UserModel",
    "RepositoryModel",
    "CommitModel",
]
