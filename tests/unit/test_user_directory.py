"""Unit tests for UserDirectory and GitHubAuthService"""

from urllib.parse import parse_qs, urlparse

import pytest
from sqlalchemy import func, select

from app.core.exceptions import AuthError
from app.core.security import verify_token
from app.models.user import UserModel
from app.services.github_auth import GitHubAuthService
from app.services.github_client import GitHubIdentity
from app.services.user_directory import UserDirectory


async def count_users(db_session) -> int:
    result = await db_session.execute(select(func.count()).select_from(UserModel))
    return result.scalar_one()


class TestUserDirectory:

    @pytest.mark.asyncio
    async def test_upsert_creates_user(self, db_session):
        directory = UserDirectory(db_session)
        identity = GitHubIdentity(id="42", login="mona", email="mona@example.com")

        user = await directory.upsert(identity, "token-1")

        assert user.id is not None
        assert user.github_id == "42"
        assert user.username == "mona"
        assert user.access_token == "token-1"
        assert await count_users(db_session) == 1

    @pytest.mark.asyncio
    async def test_upsert_reuses_user_and_overwrites_token(self, db_session):
        directory = UserDirectory(db_session)
        first = await directory.upsert(GitHubIdentity(id="42", login="mona"), "token-1")

        second = await directory.upsert(
            GitHubIdentity(id="42", login="mona-renamed", email="new@example.com"),
            "token-2"
        )

        assert second.id == first.id
        assert second.access_token == "token-2"
        # profile fields are written only on creation
        assert second.username == "mona"
        assert await count_users(db_session) == 1

    @pytest.mark.asyncio
    async def test_find_by_id(self, db_session, test_user):
        directory = UserDirectory(db_session)

        assert (await directory.find_by_id(test_user.id)).username == "octocat"
        assert await directory.find_by_id("missing") is None


class TestGitHubAuthService:

    def test_authorization_url_carries_client_id_and_scope(self, db_session, github_client):
        service = GitHubAuthService(
            github_client,
            UserDirectory(db_session),
            client_id="test-client-id",
            redirect_uri="http://localhost:8000/auth/github/callback",
            scope="user:email,repo"
        )

        url = urlparse(service.get_authorization_url())
        params = parse_qs(url.query)

        assert url.path == "/login/oauth/authorize"
        assert params["client_id"] == ["test-client-id"]
        assert params["scope"] == ["user:email,repo"]
        assert params["redirect_uri"] == ["http://localhost:8000/auth/github/callback"]

    @pytest.mark.asyncio
    async def test_authenticate_upserts_user_and_signs_token(self, db_session, github_client, fake_github):
        service = GitHubAuthService(github_client, UserDirectory(db_session))

        session_token, user = await service.authenticate("good-code")

        assert user.github_id == "1001"
        assert user.access_token == "gho_test_token"
        payload = verify_token(session_token)
        assert payload["sub"] == user.id
        assert payload["username"] == "octocat"
        assert fake_github.count("access_token") == 1
        assert fake_github.count("user") == 1

    @pytest.mark.asyncio
    async def test_authenticate_twice_keeps_one_user(self, db_session, github_client, fake_github):
        service = GitHubAuthService(github_client, UserDirectory(db_session))

        _, first = await service.authenticate("code-1")
        fake_github.access_token = "gho_rotated"
        _, second = await service.authenticate("code-2")

        assert first.id == second.id
        assert second.access_token == "gho_rotated"
        assert await count_users(db_session) == 1

    @pytest.mark.asyncio
    async def test_authenticate_bad_code_creates_nothing(self, db_session, github_client, fake_github):
        fake_github.access_token = None
        service = GitHubAuthService(github_client, UserDirectory(db_session))

        with pytest.raises(AuthError):
            await service.authenticate("bad-code")

        assert fake_github.count("user") == 0
        assert await count_users(db_session) == 0
