"""GitHub OAuth Service"""

from typing import Optional, Tuple
from urllib.parse import urlencode

from app.core.config import settings
from app.core.security import create_access_token
from app.core.logging_config import get_logger
from app.models.user import UserModel
from app.services.github_client import GitHubClient, GitHubIdentity
from app.services.user_directory import UserDirectory


logger = get_logger(__name__)


class GitHubAuthService:
    """
    Identity provider client.

    Turns an OAuth authorization code into a local user and a signed
    session token.
    """

    def __init__(
        self,
        github: GitHubClient,
        users: UserDirectory,
        client_id: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        scope: Optional[str] = None
    ):
        self.github = github
        self.users = users
        self.client_id = client_id if client_id is not None else settings.GITHUB_CLIENT_ID
        self.redirect_uri = redirect_uri if redirect_uri is not None else settings.GITHUB_REDIRECT_URI
        self.scope = scope or settings.GITHUB_OAUTH_SCOPE

    def get_authorization_url(self) -> str:
        """GitHub authorize URL the login route redirects to"""
        params = {"client_id": self.client_id, "scope": self.scope}
        if self.redirect_uri:
            params["redirect_uri"] = self.redirect_uri
        return f"{self.github.oauth_url}/authorize?{urlencode(params)}"

    async def exchange_code(self, code: str) -> str:
        return await self.github.exchange_code(code)

    async def fetch_identity(self, access_token: str) -> GitHubIdentity:
        return await self.github.fetch_identity(access_token)

    async def authenticate(self, code: str) -> Tuple[str, UserModel]:
        """
        Complete the OAuth flow.

        Args:
            code: Authorization code from the GitHub callback

        Returns:
            Tuple of (session_token, user)

        Raises:
            AuthError: If the code exchange or identity fetch fails
        """
        github_token = await self.exchange_code(code)
        identity = await self.fetch_identity(github_token)

        user = await self.users.upsert(identity, github_token)

        session_token = create_access_token(user_id=user.id, username=user.username)

        logger.info("github_login_successful", user_id=user.id, username=user.username)
        return session_token, user
