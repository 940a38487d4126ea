"""Outbound webhook events (signups, upgrades, tool usage).

Delivery is best-effort: a missing URL, a transport error or a non-2xx answer
is logged and reported as ``False``, never raised.
"""
from __future__ import annotations

import logging

import httpx

from creator_toolkit.utils_time import utc_now

log = logging.getLogger(__name__)


class Notifier:
    def __init__(self, webhook_url: str | None, timeout: float = 5.0, transport: httpx.AsyncBaseTransport | None = None):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    async def send(self, event: str, payload: dict) -> bool:
        if not self.webhook_url:
            log.info("notify_skipped", extra={"event": event})
            return False

        body = {"event": event, "timestamp": utc_now().isoformat(), **payload}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(self.webhook_url, json=body)
        except httpx.HTTPError as e:
            log.warning("notify_failed", extra={"event": event, "error": str(e)})
            return False

        if resp.is_error:
            log.warning("notify_failed", extra={"event": event, "status": resp.status_code})
            return False
        log.info("notify_sent", extra={"event": event})
        return True

    async def tool_used(self, tool_slug: str, user_id: str | None = None) -> bool:
        return await self.send("tool_used", {"tool": tool_slug, "user_id": user_id})

    async def user_signed_up(self, user_id: str, email: str | None) -> bool:
        return await self.send("user_signed_up", {"user_id": user_id, "email": email})

    async def user_upgraded_pro(self, user_id: str, email: str | None = None) -> bool:
        return await self.send("user_upgraded_pro", {"user_id": user_id, "email": email, "plan": "pro"})
