"""HTTP client for posting to the Slack Web API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .config import SLACK_API_BASE

logger = logging.getLogger(__name__)


class SlackApiError(RuntimeError):
    """Raised when Slack returns an error response."""

    def __init__(self, method: str, error: str) -> None:
        super().__init__(f"Slack API error for {method}: {error}")
        self.method = method
        self.error = error


class SlackClient:
    """Simple async wrapper around the Slack endpoint used to publish reports."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = SLACK_API_BASE,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/x-www-form-urlencoded",
            },
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def post_message(self, channel: str, markdown_text: str) -> Dict[str, Any]:
        method = "chat.postMessage"
        try:
            response = await self._client.post(
                method, data={"channel": channel, "markdown_text": markdown_text}
            )
        except httpx.HTTPError as exc:
            raise SlackApiError(method, str(exc) or type(exc).__name__) from exc
        if response.is_error:
            raise SlackApiError(method, f"HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError as exc:
            raise SlackApiError(method, "invalid_json") from exc
        if not isinstance(data, dict) or not data.get("ok"):
            error = data.get("error", "unknown_error") if isinstance(data, dict) else "unknown_error"
            raise SlackApiError(method, error)
        logger.info("Posted report to channel %s", channel)
        return data


__all__ = ["SlackClient", "SlackApiError"]
