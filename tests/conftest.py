"""
Shared fixtures: an app wired to in-memory SQLite and a stub LLM.
"""

import os

# required configuration must exist before ``main`` is imported
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("OPENAI_API_KEY", "sk-test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from typing import List

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from auth.jwt import TokenService
from config.settings import Settings
from database.session import build_engine, build_session_factory, create_tables
from utils.llm_providers import BaseLLMProvider

TEST_SECRET = "test-secret"


class StubLLMProvider(BaseLLMProvider):
    """Records prompts and answers with a canned reply."""

    def __init__(self, reply: str = "A short summary."):
        self.reply = reply
        self.error: Exception | None = None
        self.prompts: List[str] = []

    async def generate(self, prompt, *, temperature=0.3, model=None, max_tokens=1024):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SECRET,
        openai_api_key="sk-test",
        database_url="sqlite+aiosqlite://",
        bcrypt_rounds=4,
    )


@pytest.fixture
def llm() -> StubLLMProvider:
    return StubLLMProvider()


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(TEST_SECRET)


@pytest.fixture
def client(settings, llm):
    from main import create_app

    app = create_app(settings, llm_provider=llm)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register(client):
    """Create a user through the API and return the response body."""

    def _register(name="Ann", email="a@x.com", password="secret1"):
        resp = client.post(
            "/api/v1/user", json={"name": name, "email": email, "password": password}
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _register


@pytest.fixture
def login(client):
    def _login(email="a@x.com", password="secret1") -> str:
        resp = client.post("/api/v1/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return resp.json()["token"]

    return _login


@pytest_asyncio.fixture
async def db_session():
    engine = build_engine("sqlite+aiosqlite://")
    await create_tables(engine)
    factory = build_session_factory(engine)
    async with factory() as session:
        yield session
    await engine.dispose()
