"""Shared test fixtures for all tests"""

import re
from typing import Any, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from app.core.database import build_session_factory
from app.core.security import create_access_token
from app.models import Base, CommitModel, RepositoryModel, UserModel
from app.services.github_client import GitHubClient


GITHUB_API_URL = "https://api.github.test"
GITHUB_OAUTH_URL = "https://github.test/login/oauth"

SAMPLE_DIFF = """diff --git a/app.py b/app.py
--- a/app.py
+++ b/app.py
@@ -1 +1,2 @@
 print("hello")
+print("world")"""


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def db_engine():
    """Create test database engine (in-memory SQLite)"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create test database session"""
    async_session_factory = build_session_factory(db_engine)

    async with async_session_factory() as session:
        yield session
        await session.rollback()


# ============================================================================
# GitHub stub
# ============================================================================

class FakeGitHub:
    """
    In-process stand-in for github.com and api.github.com.

    Serves canned payloads through ``httpx.MockTransport`` and counts the
    calls made to each endpoint. Add a path to ``failing`` to make it
    answer 500.
    """

    def __init__(self):
        self.identity: Dict[str, Any] = {
            "id": 1001,
            "login": "octocat",
            "email": "octocat@example.com",
            "avatar_url": "https://avatars.example.com/u/1001",
        }
        self.access_token: Optional[str] = "gho_test_token"
        self.repositories: List[Dict[str, Any]] = [
            {
                "id": 11,
                "name": "hello-world",
                "full_name": "octocat/hello-world",
                "description": "My first repository",
                "html_url": "https://github.com/octocat/hello-world",
            },
            {
                "id": 12,
                "name": "spoon-knife",
                "full_name": "octocat/spoon-knife",
                "description": None,
                "html_url": "https://github.com/octocat/spoon-knife",
            },
        ]
        self.commits: Dict[str, List[Dict[str, Any]]] = {
            "octocat/hello-world": [
                make_commit_payload("a" * 40, "Add world greeting", "2024-05-02T10:00:00Z"),
                make_commit_payload("b" * 40, "Initial commit", "2024-05-01T09:00:00Z"),
            ],
        }
        self.diff = SAMPLE_DIFF
        self.failing: set = set()
        self.calls: Dict[str, int] = {}
        self.requests: List[httpx.Request] = []

    def count(self, name: str) -> int:
        return self.calls.get(name, 0)

    def _record(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path in self.failing:
            return httpx.Response(500, json={"message": "Server Error"})

        if request.method == "POST" and path.endswith("/login/oauth/access_token"):
            self._record("access_token")
            if self.access_token is None:
                return httpx.Response(200, json={
                    "error": "bad_verification_code",
                    "error_description": "The code passed is incorrect or expired.",
                })
            return httpx.Response(200, json={
                "access_token": self.access_token,
                "token_type": "bearer",
                "scope": "repo,user:email",
            })

        if path == "/user":
            self._record("user")
            return httpx.Response(200, json=self.identity)

        if path == "/user/repos":
            self._record("user_repos")
            return httpx.Response(200, json=self.repositories)

        match = re.fullmatch(r"/repos/([^/]+/[^/]+)/commits(?:/([0-9a-f]+))?", path)
        if match:
            full_name, sha = match.groups()
            if sha:
                self._record("diff")
                return httpx.Response(200, text=self.diff)
            self._record("commits")
            return httpx.Response(200, json=self.commits.get(full_name, []))

        return httpx.Response(404, json={"message": "Not Found"})


def make_commit_payload(sha: str, message: str, date: str) -> Dict[str, Any]:
    """Shape of one entry of ``GET /repos/{owner}/{repo}/commits``"""
    return {
        "sha": sha,
        "commit": {
            "message": message,
            "author": {"name": "The Octocat", "email": "octocat@example.com", "date": date},
        },
    }


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def github_client(fake_github):
    """GitHubClient wired to the fake GitHub"""
    return GitHubClient(
        api_url=GITHUB_API_URL,
        oauth_url=GITHUB_OAUTH_URL,
        client_id="test-client-id",
        client_secret="test-client-secret",
        transport=httpx.MockTransport(fake_github.handler),
    )


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_user(db_session):
    """A user who already logged in through GitHub"""
    user = UserModel(
        github_id="1001",
        username="octocat",
        email="octocat@example.com",
        access_token="gho_test_token",
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def other_user(db_session):
    user = UserModel(
        github_id="2002",
        username="hubot",
        email="hubot@example.com",
        access_token="gho_other_token",
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def test_repository(db_session, test_user):
    """A mirrored repository owned by ``test_user``"""
    repository = RepositoryModel(
        github_id="11",
        name="hello-world",
        full_name="octocat/hello-world",
        description="My first repository",
        url="https://github.com/octocat/hello-world",
        owner_id=test_user.id,
    )
    db_session.add(repository)
    await db_session.commit()
    return repository


@pytest_asyncio.fixture
async def test_commit(db_session, test_repository):
    """A mirrored commit without an article"""
    commit = CommitModel(
        sha="a" * 40,
        message="Add world greeting",
        author_name="The Octocat",
        author_email="octocat@example.com",
        repository_id=test_repository.id,
    )
    db_session.add(commit)
    await db_session.commit()
    return commit


@pytest.fixture
def auth_headers(test_user):
    token = create_access_token(user_id=test_user.id, username=test_user.username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_user):
    token = create_access_token(user_id=other_user.id, username=other_user.username)
    return {"Authorization": f"Bearer {token}"}


# ============================================================================
# HTTP client
# ============================================================================

@pytest.fixture
def chat_model():
    """Chat model handed to ArticleGenerator; None means no Gemini key"""
    return None


@pytest_asyncio.fixture
async def client(db_session, github_client, chat_model):
    """Create test HTTP client with the database, GitHub and Gemini stubbed"""
    from httpx import ASGITransport, AsyncClient
    from app.main import app
    from app.core.database import get_db
    from app.api.dependencies import get_chat_model, get_github_client

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_github_client] = lambda: github_client
    app.dependency_overrides[get_chat_model] = lambda: chat_model

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
