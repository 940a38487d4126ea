"""Test configuration and fixtures."""

import json
import random

import fakeredis
import httpx
import pytest

from creator_toolkit.config import Settings
from creator_toolkit.context import build_context
from creator_toolkit.db import Database
from creator_toolkit.main import create_app
from creator_toolkit.notify import Notifier

WEBHOOK_URL = "https://hooks.example.test/creator-toolkit"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file; no .env lookup."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        redis_url=None,
        free_daily_limit=3,
        notify_webhook_url=WEBHOOK_URL,
    )


@pytest.fixture
async def database(settings):
    """Fresh schema per test."""
    db = Database(settings.database_url)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def redis():
    return fakeredis.FakeAsyncRedis(decode_responses=True)


@pytest.fixture
def sent_events() -> list:
    """Bodies the notifier POSTed to the webhook, in order."""
    return []


@pytest.fixture
def notifier(sent_events) -> Notifier:
    def handler(request: httpx.Request) -> httpx.Response:
        sent_events.append(json.loads(request.content))
        return httpx.Response(204)

    return Notifier(WEBHOOK_URL, transport=httpx.MockTransport(handler))


@pytest.fixture
def ctx(settings, database, redis, notifier):
    return build_context(settings, database=database, redis=redis, notifier=notifier, rng=random.Random(1234))


@pytest.fixture
async def client(ctx):
    """HTTP client bound to an app that uses the test context."""
    app = create_app(context=ctx)
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def login(ctx):
    """Create a session and return the Authorization header for it."""

    async def _login(user_id: str, email: str | None = None) -> dict:
        token = await ctx.auth.create_session(user_id, email)
        return {"Authorization": f"Bearer {token}"}

    return _login
