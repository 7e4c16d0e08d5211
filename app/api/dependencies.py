"""Common API dependencies: service wiring and authentication"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from langchain_core.language_models.chat_models import BaseChatModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import AuthError
from app.core.logging_config import get_logger
from app.core.security import verify_token
from app.models.user import UserModel
from app.services.article_generator import ArticleGenerator
from app.services.commit_mirror import CommitMirror
from app.services.github_auth import GitHubAuthService
from app.services.github_client import GitHubClient
from app.services.repository_mirror import RepositoryMirror
from app.services.user_directory import UserDirectory


logger = get_logger(__name__)

# auto_error=False so a missing header is reported as 401, not 403
security = HTTPBearer(auto_error=False)


def get_github_client() -> GitHubClient:
    """Dependency to get a GitHubClient configured from settings"""
    return GitHubClient()


def get_chat_model() -> Optional[BaseChatModel]:
    """Chat model override point; None lets ArticleGenerator build Gemini lazily"""
    return None


async def get_user_directory(db: AsyncSession = Depends(get_db)) -> UserDirectory:
    return UserDirectory(db_session=db)


async def get_auth_service(
    github: GitHubClient = Depends(get_github_client),
    users: UserDirectory = Depends(get_user_directory)
) -> GitHubAuthService:
    """Dependency to get GitHubAuthService instance"""
    return GitHubAuthService(github=github, users=users)


async def get_repository_mirror(
    db: AsyncSession = Depends(get_db),
    github: GitHubClient = Depends(get_github_client)
) -> RepositoryMirror:
    """Dependency to get RepositoryMirror instance"""
    return RepositoryMirror(db_session=db, github=github)


async def get_commit_mirror(
    db: AsyncSession = Depends(get_db),
    github: GitHubClient = Depends(get_github_client)
) -> CommitMirror:
    """Dependency to get CommitMirror instance"""
    return CommitMirror(db_session=db, github=github)


async def get_article_generator(
    db: AsyncSession = Depends(get_db),
    github: GitHubClient = Depends(get_github_client),
    llm: Optional[BaseChatModel] = Depends(get_chat_model)
) -> ArticleGenerator:
    """Dependency to get ArticleGenerator instance"""
    return ArticleGenerator(db_session=db, github=github, llm=llm)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    users: UserDirectory = Depends(get_user_directory)
) -> UserModel:
    """
    Dependency to get current authenticated user from the session token.

    Raises:
        AuthError: If the token is missing, invalid, expired, or its user is gone
    """
    if credentials is None:
        raise AuthError(
            "Not authenticated",
            error_code="authentication_required",
            context="auth.get_current_user"
        )

    payload = verify_token(credentials.credentials)
    if payload is None:
        logger.warning("token_verification_failed", context="auth.get_current_user")
        raise AuthError(
            "Invalid or expired token",
            error_code="token_validation_failed",
            context="auth.get_current_user"
        )

    user = await users.find_by_id(payload["sub"])
    if user is None:
        logger.warning(
            "user_not_found",
            user_id=payload["sub"],
            context="auth.get_current_user"
        )
        raise AuthError(
            "User not found",
            error_code="user_not_found",
            context="auth.get_current_user"
        )

    request.state.user_id = user.id
    return user
