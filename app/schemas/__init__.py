"""Pydantic schemas for API request/response validation"""

from app.schemas.common import CamelModel, HealthCheck
from app.schemas.user import User
from app.schemas.repository import Repository
from app.schemas.commit import (
    Commit,
    Article,
    GenerateArticleRequest,
    UpdateArticleRequest
)

__all__ = [
    "CamelModel",
    "HealthCheck",
    "User",
    "Repository",
    "Commit",
    "Article",
    "GenerateArticleRequest",
    "UpdateArticleRequest",
]
