"""Async GitHub REST/OAuth client"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ValidationError

from app.core.config import settings
from app.core.exceptions import AuthError, UpstreamError
from app.core.logging_config import get_logger


logger = get_logger(__name__)

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"
JSON_MEDIA_TYPE = "application/vnd.github+json"


class GitHubIdentity(BaseModel):
    """The subset of ``GET /user`` the backend keeps"""
    id: str
    login: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None


def parse_github_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 GitHub timestamp into naive UTC"""
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class GitHubClient:
    """
    Thin wrapper over ``httpx.AsyncClient`` for the calls this backend makes.

    OAuth failures surface as ``AuthError``; REST failures as ``UpstreamError``.
    No retries are attempted. Pass ``transport`` to stub GitHub in tests.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        oauth_url: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        timeout: Optional[float] = None,
        page_size: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_url = (api_url or settings.GITHUB_API_URL).rstrip("/")
        self.oauth_url = (oauth_url or settings.GITHUB_OAUTH_URL).rstrip("/")
        self.client_id = client_id if client_id is not None else settings.GITHUB_CLIENT_ID
        self.client_secret = client_secret if client_secret is not None else settings.GITHUB_CLIENT_SECRET
        self.timeout = timeout or settings.GITHUB_TIMEOUT_SECONDS
        self.page_size = page_size or settings.GITHUB_PAGE_SIZE
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    # ------------------------------------------------------------------
    # OAuth
    # ------------------------------------------------------------------

    async def exchange_code(self, code: str) -> str:
        """
        Exchange an OAuth authorization code for a user access token.

        Raises:
            AuthError: If the request fails or GitHub returns no token
        """
        try:
            async with self._client() as client:
                response = await client.post(
                    f"{self.oauth_url}/access_token",
                    headers={"Accept": "application/json"},
                    data={
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "code": code,
                    },
                )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise AuthError(
                f"Failed to exchange authorization code: {e}",
                error_code="oauth_exchange_failed",
                context="github.exchange_code"
            ) from e

        access_token = data.get("access_token")
        if not access_token:
            error = data.get("error_description") or data.get("error") or "no access token returned"
            raise AuthError(
                f"GitHub OAuth failed: {error}",
                error_code="oauth_exchange_failed",
                context="github.exchange_code"
            )
        return access_token

    async def fetch_identity(self, access_token: str) -> GitHubIdentity:
        """
        Fetch the authenticated GitHub user.

        Raises:
            AuthError: On any transport failure, non-success response or a
                reply without the account id and login
        """
        try:
            async with self._client() as client:
                response = await client.get(
                    f"{self.api_url}/user",
                    headers=self._headers(access_token, bearer=True),
                )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise AuthError(
                f"Failed to fetch user info from GitHub: {e}",
                error_code="identity_fetch_failed",
                context="github.fetch_identity"
            ) from e

        try:
            return GitHubIdentity(
                id=str(data["id"]),
                login=data["login"],
                email=data.get("email"),
                avatar_url=data.get("avatar_url"),
            )
        except (KeyError, TypeError, ValidationError) as e:
            raise AuthError(
                "GitHub returned an incomplete user profile",
                error_code="identity_fetch_failed",
                context="github.fetch_identity",
                details={"missing": str(e)}
            ) from e

    # ------------------------------------------------------------------
    # REST
    # ------------------------------------------------------------------

    async def list_user_repositories(self, access_token: str) -> List[Dict[str, Any]]:
        """Most recently updated repositories of the token's user, one page"""
        return await self._get_json(
            "/user/repos",
            access_token,
            params={"sort": "updated", "per_page": self.page_size},
            context="github.list_user_repositories"
        )

    async def list_commits(self, full_name: str, access_token: str) -> List[Dict[str, Any]]:
        """Latest commits of ``owner/repo`` on the default branch, one page"""
        return await self._get_json(
            f"/repos/{full_name}/commits",
            access_token,
            params={"per_page": self.page_size},
            context="github.list_commits"
        )

    async def get_commit_diff(self, full_name: str, sha: str, access_token: Optional[str]) -> str:
        """Unified diff of a single commit"""
        response = await self._request(
            f"/repos/{full_name}/commits/{sha}",
            access_token,
            accept=DIFF_MEDIA_TYPE,
            context="github.get_commit_diff"
        )
        return response.text

    async def _get_json(
        self,
        path: str,
        access_token: Optional[str],
        params: Optional[Dict[str, Any]] = None,
        context: Optional[str] = None
    ) -> Any:
        response = await self._request(path, access_token, params=params, context=context)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"GitHub returned a malformed response for {path}",
                upstream_status=response.status_code,
                context=context
            ) from e

    async def _request(
        self,
        path: str,
        access_token: Optional[str],
        params: Optional[Dict[str, Any]] = None,
        accept: str = JSON_MEDIA_TYPE,
        context: Optional[str] = None
    ) -> httpx.Response:
        url = f"{self.api_url}{path}"
        try:
            async with self._client() as client:
                response = await client.get(
                    url,
                    headers=self._headers(access_token, accept=accept),
                    params=params,
                )
        except httpx.HTTPError as e:
            logger.error("github_request_failed", path=path, error_message=str(e), context=context)
            raise UpstreamError(
                f"Failed to communicate with GitHub: {e}",
                context=context
            ) from e

        if response.is_error:
            logger.warning(
                "github_request_rejected",
                path=path,
                status_code=response.status_code,
                context=context
            )
            raise UpstreamError(
                f"GitHub API error {response.status_code} for {path}",
                upstream_status=response.status_code,
                context=context
            )
        return response

    @staticmethod
    def _headers(
        access_token: Optional[str],
        accept: str = JSON_MEDIA_TYPE,
        bearer: bool = False
    ) -> Dict[str, str]:
        headers = {"Accept": accept, "X-GitHub-Api-Version": "2022-11-28"}
        if access_token:
            scheme = "Bearer" if bearer else "token"
            headers["Authorization"] = f"{scheme} {access_token}"
        return headers
