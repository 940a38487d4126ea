"""Tests for the webhook notifier."""

import json

import httpx

from creator_toolkit.notify import Notifier

URL = "https://hooks.example.test/events"


def _recording_transport(sink: list, status: int = 204) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        sink.append(json.loads(request.content))
        return httpx.Response(status)

    return httpx.MockTransport(handler)


class TestNotifier:
    """Test best-effort event delivery."""

    async def test_sends_event_body(self):
        sent: list = []
        notifier = Notifier(URL, transport=_recording_transport(sent))

        assert await notifier.user_signed_up("u1", "a@example.com") is True

        assert len(sent) == 1
        assert sent[0]["event"] == "user_signed_up"
        assert sent[0]["user_id"] == "u1"
        assert sent[0]["email"] == "a@example.com"
        assert "timestamp" in sent[0]

    async def test_upgrade_event_names_plan(self):
        sent: list = []
        notifier = Notifier(URL, transport=_recording_transport(sent))
        await notifier.user_upgraded_pro("u1")
        assert sent[0]["event"] == "user_upgraded_pro"
        assert sent[0]["plan"] == "pro"

    async def test_disabled_without_url(self):
        notifier = Notifier(None)
        assert notifier.enabled is False
        assert await notifier.tool_used("title-hook", "u1") is False

    async def test_error_status_is_reported_not_raised(self):
        sent: list = []
        notifier = Notifier(URL, transport=_recording_transport(sent, status=500))
        assert await notifier.tool_used("title-hook") is False
        assert len(sent) == 1

    async def test_transport_error_is_reported_not_raised(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        notifier = Notifier(URL, transport=httpx.MockTransport(handler))
        assert await notifier.tool_used("title-hook", "u1") is False
