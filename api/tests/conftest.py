"""API test configuration."""

import os
import time
from unittest.mock import AsyncMock, MagicMock

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import httpx
import pytest
from api.dependencies import get_db, get_llm_client, require_admin
from api.main import create_app
from httpx import ASGITransport, AsyncClient
from sitekit.config import reset_settings_cache
from sitekit.services.llm_client import LLMClient, LLMConfig


def _fake_admin():
    return "test-admin"


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def app():
    a = create_app()
    a.state._setup_complete = True
    a.state._setup_checked_at = time.monotonic()
    a.dependency_overrides[require_admin] = _fake_admin
    return a


@pytest.fixture
def mock_db():
    """Creates a mock AsyncSession with common patterns pre-configured."""
    session = AsyncMock()
    # AsyncSession.add() is synchronous; use MagicMock to avoid un-awaited coroutine warnings.
    session.add = MagicMock()
    session.add_all = MagicMock()
    # Default: execute returns empty result set
    empty_result = MagicMock()
    empty_result.scalars.return_value.all.return_value = []
    empty_result.scalars.return_value.first.return_value = None
    empty_result.scalar.return_value = 0
    empty_result.one.return_value = (0, None, None, None)
    empty_result.all.return_value = []
    empty_result.rowcount = 0
    session.execute.return_value = empty_result
    # Default: get returns None
    session.get.return_value = None
    return session


@pytest.fixture
def llm(app):
    """Install an LLM client whose HTTP calls go to ``llm.handler``."""

    class _Stub:
        calls: list[httpx.Request] = []
        configured = True

        def handler(self, request):
            return httpx.Response(500, json={"error": "no handler"})

    stub = _Stub()
    stub.calls = []

    def _dispatch(request):
        stub.calls.append(request)
        return stub.handler(request)

    async def _override_llm():
        config = LLMConfig(
            api_endpoint="https://ai.test/v1" if stub.configured else "",
            model_id="test-model",
        )
        client = LLMClient(config, transport=httpx.MockTransport(_dispatch))
        try:
            yield client
        finally:
            await client.close()

    app.dependency_overrides[get_llm_client] = _override_llm
    return stub


@pytest.fixture
async def client(app, mock_db):
    async def _override_db():
        yield mock_db

    app.dependency_overrides[get_db] = _override_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def unauthenticated_client(monkeypatch, mock_db):
    """Client with real admin auth (bypass off) -- tests that endpoints require auth."""
    monkeypatch.setenv("ADMIN_AUTH_BYPASS", "false")
    reset_settings_cache()
    a = create_app()
    a.state._setup_complete = True
    a.state._setup_checked_at = time.monotonic()

    async def _override_db():
        yield mock_db

    a.dependency_overrides[get_db] = _override_db
    transport = ASGITransport(app=a)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
