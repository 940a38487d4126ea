"""End-to-end tests for POST /tools/{slug}."""

import logging

import httpx
import pytest

from creator_toolkit.context import build_context
from creator_toolkit.errors import BestEffortFailure, StoreUnavailable, ValidationFailed
from creator_toolkit.main import create_app
from creator_toolkit.security import Identity
from creator_toolkit.services import history, orchestrator, usage
from creator_toolkit.tools import get_tool

DRONE = {"topic": "drone photography"}


async def _history(client, headers) -> list:
    resp = await client.get("/me/history", headers=headers)
    assert resp.status_code == 200
    return resp.json()["runs"]


class TestMeteredGeneration:
    """Test signed-in callers on the free and pro plans."""

    async def test_first_generation(self, client, login):
        headers = await login("user-1", "u1@example.com")

        resp = await client.post("/tools/title-hook", json=DRONE, headers=headers)

        assert resp.status_code == 200
        body = resp.json()
        assert len(body["output"]["titles"]) == 10
        assert len(body["output"]["hooks"]) == 5
        assert body["remainingUses"] == 2
        assert body["saved"] is True

        runs = await _history(client, headers)
        assert len(runs) == 1
        assert runs[0]["toolSlug"] == "title-hook"
        assert runs[0]["input"] == DRONE
        assert runs[0]["output"] == body["output"]

    async def test_fourth_generation_is_denied(self, client, login):
        headers = await login("user-1")
        remaining = []
        for _ in range(3):
            resp = await client.post("/tools/title-hook", json=DRONE, headers=headers)
            remaining.append(resp.json()["remainingUses"])
        assert remaining == [2, 1, 0]

        resp = await client.post("/tools/title-hook", json=DRONE, headers=headers)

        assert resp.status_code == 429
        body = resp.json()
        assert body["error"]["code"] == "DAILY_LIMIT_REACHED"
        assert body["remainingUses"] == 0
        assert len(await _history(client, headers)) == 3

    async def test_denied_request_never_reaches_generator(self, client, login, monkeypatch):
        headers = await login("user-1")
        for _ in range(3):
            await client.post("/tools/seo-toolkit", json=DRONE, headers=headers)

        calls = []

        def spy(tool, data, rng):
            calls.append(tool.slug)
            return {}

        monkeypatch.setattr(orchestrator, "run_tool", spy)
        resp = await client.post("/tools/seo-toolkit", json=DRONE, headers=headers)

        assert resp.status_code == 429
        assert calls == []

    async def test_quota_is_shared_across_tools(self, client, login):
        headers = await login("user-1")
        for slug in ("title-hook", "thumbnail-brief", "upload-checklist"):
            assert (await client.post(f"/tools/{slug}", json=DRONE, headers=headers)).status_code == 200

        resp = await client.post("/tools/seo-toolkit", json=DRONE, headers=headers)
        assert resp.status_code == 429

    async def test_pro_is_unlimited(self, client, login):
        headers = await login("user-pro")
        resp = await client.post("/auth/update-plan", json={"plan": "pro"}, headers=headers)
        assert resp.status_code == 200

        for _ in range(5):
            resp = await client.post("/tools/title-hook", json=DRONE, headers=headers)
            assert resp.status_code == 200
            assert resp.json()["remainingUses"] == "unlimited"

        me = (await client.get("/me", headers=headers)).json()
        assert me["usage"]["used"] == 5

    async def test_history_failure_still_returns_output(self, client, login, monkeypatch):
        headers = await login("user-1")

        async def broken(*args, **kwargs):
            raise BestEffortFailure("history write failed")

        monkeypatch.setattr(history, "record_run", broken)
        resp = await client.post("/tools/title-hook", json=DRONE, headers=headers)

        assert resp.status_code == 200
        body = resp.json()
        assert body["saved"] is False
        assert body["remainingUses"] == 2
        assert len(body["output"]["titles"]) == 10

    async def test_tool_used_event(self, client, login, sent_events):
        headers = await login("user-1")
        await client.post("/tools/upload-checklist", json={"topic": "vlog"}, headers=headers)

        used = [e for e in sent_events if e["event"] == "tool_used"]
        assert len(used) == 1
        assert used[0]["tool"] == "upload-checklist"
        assert used[0]["user_id"] == "user-1"


class TestAnonymousGeneration:
    """Test callers without a session."""

    async def test_unmetered_and_unsaved(self, client):
        for _ in range(5):
            resp = await client.post("/tools/script-outline", json={"topic": "x", "videoLength": "8"})
            assert resp.status_code == 200
            body = resp.json()
            assert body["remainingUses"] is None
            assert body["saved"] is False
            assert body["output"]["metadata"]["totalSeconds"] == 480

    async def test_unknown_token_is_anonymous(self, client):
        resp = await client.post("/tools/title-hook", json=DRONE, headers={"Authorization": "Bearer bogus"})
        assert resp.status_code == 200
        assert resp.json()["remainingUses"] is None

    async def test_tool_used_event_without_user(self, client, sent_events):
        await client.post("/tools/title-hook", json=DRONE)
        assert sent_events[-1]["event"] == "tool_used"
        assert sent_events[-1]["user_id"] is None


class TestRejectedRequests:
    """Test validation and lookup failures."""

    async def test_missing_required_field(self, client, login):
        headers = await login("user-1")

        resp = await client.post("/tools/title-hook", json={"niche": "tech"}, headers=headers)

        assert resp.status_code == 400
        error = resp.json()["error"]
        assert error["code"] == "VALIDATION_FAILED"
        assert "Video Topic" in error["message"]

        me = (await client.get("/me", headers=headers)).json()
        assert me["usage"]["used"] == 0

    async def test_blank_required_field(self, client):
        resp = await client.post("/tools/script-outline", json={"topic": "x", "videoLength": " "})
        assert resp.status_code == 400
        assert resp.json()["error"]["detail"] == {"field": "videoLength"}

    @pytest.mark.parametrize("slug", ["viral-predictor", "analytics-tracker"])
    async def test_unknown_or_unavailable_tool(self, client, slug):
        resp = await client.post(f"/tools/{slug}", json=DRONE)
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "TOOL_NOT_FOUND"

    async def test_non_object_body(self, client):
        resp = await client.post("/tools/title-hook", json=["drone photography"])
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "VALIDATION_FAILED"


class TestIdempotencyKey:
    """Test replay protection for signed-in callers."""

    async def test_replay_is_rejected(self, client, login):
        headers = {**(await login("user-1")), "Idempotency-Key": "req-42"}

        first = await client.post("/tools/title-hook", json=DRONE, headers=headers)
        second = await client.post("/tools/title-hook", json=DRONE, headers=headers)

        assert first.status_code == 200
        assert second.status_code == 409
        assert second.json()["error"]["code"] == "DUPLICATE_REQUEST"

        me = (await client.get("/me", headers=headers)).json()
        assert me["usage"]["used"] == 1

    async def test_denied_request_releases_key(self, client, login):
        headers = await login("user-1")
        for _ in range(3):
            await client.post("/tools/title-hook", json=DRONE, headers=headers)

        keyed = {**headers, "Idempotency-Key": "retry-me"}
        assert (await client.post("/tools/title-hook", json=DRONE, headers=keyed)).status_code == 429
        assert (await client.post("/tools/title-hook", json=DRONE, headers=keyed)).status_code == 429


class TestUnconfiguredStore:
    """Test anonymous-only mode when no database is configured."""

    @pytest.fixture
    async def bare_client(self, settings, redis, notifier):
        ctx = build_context(settings.model_copy(update={"database_url": None}), redis=redis, notifier=notifier)
        app = create_app(context=ctx)
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
            yield c, ctx

    async def test_signed_in_caller_runs_unmetered(self, bare_client):
        client, ctx = bare_client
        token = await ctx.auth.create_session("user-1")
        headers = {"Authorization": f"Bearer {token}"}

        for _ in range(4):
            resp = await client.post("/tools/title-hook", json=DRONE, headers=headers)
            assert resp.status_code == 200
            assert resp.json()["remainingUses"] is None
            assert resp.json()["saved"] is False

    async def test_profile_endpoints_report_unavailable(self, bare_client):
        client, ctx = bare_client
        token = await ctx.auth.create_session("user-1")

        resp = await client.get("/me", headers={"Authorization": f"Bearer {token}"})

        assert resp.status_code == 503
        assert resp.json()["error"]["code"] == "STORE_UNAVAILABLE"

    async def test_health_reports_mode(self, bare_client):
        client, _ = bare_client
        body = (await client.get("/health")).json()
        assert body["store"] == "unconfigured"
        assert body["sessions"] == "configured"

    async def test_signed_in_caller_is_logged_as_unmetered(self, bare_client, caplog):
        client, ctx = bare_client
        token = await ctx.auth.create_session("user-1")

        with caplog.at_level(logging.WARNING, logger="creator_toolkit.services.orchestrator"):
            await client.post("/tools/title-hook", json=DRONE, headers={"Authorization": f"Bearer {token}"})
            await client.post("/tools/title-hook", json=DRONE)

        unmetered = [r for r in caplog.records if r.getMessage() == "unmetered_generation"]
        assert len(unmetered) == 1
        assert unmetered[0].user_id == "user-1"


class TestLedgerFailure:
    """Test that an unreachable usage ledger fails closed."""

    @pytest.fixture
    def broken_ledger(self, monkeypatch):
        async def broken(*args, **kwargs):
            raise StoreUnavailable(detail={"step": "usage_increment"})

        monkeypatch.setattr(usage, "try_consume", broken)

    @pytest.fixture
    def generator_calls(self, monkeypatch) -> list:
        calls: list = []

        def spy(tool, data, rng):
            calls.append(tool.slug)
            return {}

        monkeypatch.setattr(orchestrator, "run_tool", spy)
        return calls

    async def test_returns_retryable_error_without_generating(self, client, login, broken_ledger, generator_calls):
        headers = await login("user-1")

        resp = await client.post("/tools/title-hook", json=DRONE, headers=headers)

        assert resp.status_code == 503
        assert resp.json()["error"]["code"] == "STORE_UNAVAILABLE"
        assert generator_calls == []

    async def test_releases_idempotency_key(self, client, login, redis, broken_ledger, generator_calls):
        headers = {**(await login("user-1")), "Idempotency-Key": "k-503"}

        resp = await client.post("/tools/title-hook", json=DRONE, headers=headers)

        assert resp.status_code == 503
        assert await redis.exists("idem:gen:user-1:k-503") == 0

    async def test_no_history_is_recorded(self, client, login, broken_ledger, generator_calls, ctx):
        headers = await login("user-1")
        await client.post("/tools/title-hook", json=DRONE, headers=headers)

        async with ctx.database.sessionmaker() as db:
            assert await history.list_runs(db, "user-1", 10) == []


class TestOrchestrator:
    """Test the orchestrator directly."""

    async def test_validation_precedes_metering(self, ctx, redis):
        with pytest.raises(ValidationFailed):
            await orchestrator.generate(ctx, get_tool("title-hook"), {"topic": " "}, Identity("user-1"), "k-1")

        async with ctx.database.sessionmaker() as db:
            assert await usage.get_count(db, "user-1", ctx.today()) == 0
        assert await redis.exists("idem:gen:user-1:k-1") == 0

    async def test_result_for_metered_caller(self, ctx):
        result = await orchestrator.generate(ctx, get_tool("upload-checklist"), {"topic": "vlog"}, Identity("user-1"))

        assert result.remaining_uses == 2
        assert result.saved is True
        assert result.run_id is not None
        assert result.output["videoDetails"]["topic"] == "vlog"
