"""HTTP client for reading standup reports from the Geekbot API."""

from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from .config import GEEKBOT_API_BASE
from .models import CheckInRecord

logger = logging.getLogger(__name__)


class GeekbotApiError(RuntimeError):
    """Raised when Geekbot returns an error status or an unexpected payload."""

    def __init__(self, path: str, error: str) -> None:
        super().__init__(f"Geekbot API error for {path}: {error}")
        self.path = path
        self.error = error


class GeekbotClient:
    """Async wrapper around the Geekbot reports endpoint."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = GEEKBOT_API_BASE,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        # Geekbot expects the bare API key, without a "Bearer" prefix.
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            headers={
                "Authorization": token,
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_reports(self, after: int) -> List[CheckInRecord]:
        """Return every check-in submitted at or after the ``after`` epoch second."""

        path = "v1/reports"
        try:
            response = await self._client.get(path, params={"after": after})
        except httpx.HTTPError as exc:
            raise GeekbotApiError(path, str(exc) or type(exc).__name__) from exc
        if response.is_error:
            raise GeekbotApiError(path, f"HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError as exc:
            raise GeekbotApiError(path, "invalid_json") from exc
        if not isinstance(data, list):
            raise GeekbotApiError(path, "expected a list of reports")

        records: List[CheckInRecord] = []
        for item in data:
            try:
                records.append(CheckInRecord.from_payload(item))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise GeekbotApiError(path, f"malformed report: {exc}") from exc
        logger.info("Fetched %d check-ins after %d", len(records), after)
        return records


__all__ = ["GeekbotClient", "GeekbotApiError"]
