"""Services package"""

from app.services.github_client import GitHubClient, GitHubIdentity
from app.services.user_directory import UserDirectory
from app.services.github_auth import GitHubAuthService
from app.services.repository_mirror import RepositoryMirror
from app.services.commit_mirror import CommitMirror
from app.services.article_generator import ArticleGenerator

__all__ = [
    "GitHubClient",
    "GitHubIdentity",
    "UserDirectory",
    "GitHubAuthService",
    "RepositoryMirror",
    "CommitMirror",
    "ArticleGenerator",
]
