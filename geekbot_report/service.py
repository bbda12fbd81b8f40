"""Core orchestration logic for the Geekbot participation report."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import httpx

from .config import BASIS_WORK_DAYS, Settings
from .geekbot_client import GeekbotClient
from .metrics import aggregate
from .report import format_report
from .slack_client import SlackClient
from .window import ReportWindow, compute_window

logger = logging.getLogger(__name__)


class ReportService:
    """Fetches check-ins for the window, renders the summary and posts it."""

    def __init__(
        self, settings: Settings, geekbot: GeekbotClient, slack: SlackClient
    ) -> None:
        self.settings = settings
        self.geekbot = geekbot
        self.slack = slack

    def denominator(self, window: ReportWindow) -> int:
        if self.settings.percentage_basis == BASIS_WORK_DAYS:
            return window.work_day_count
        return self.settings.duration

    async def build_report(self, now: Optional[datetime] = None) -> str:
        window = compute_window(self.settings, now)
        logger.info(
            "Reporting on check-ins since %s, day starts at %s (include today: %s)",
            window.start.date().isoformat(),
            self.settings.start_time,
            window.include_today,
        )
        records = await self.geekbot.fetch_reports(window.after)
        participation, lateness = aggregate(
            records, self.settings.start_time, self.settings.due_by_time
        )
        logger.info("Aggregated %d participants", len(participation.counts))
        return format_report(
            self.settings.heading, participation, lateness, self.denominator(window)
        )

    async def run(self, now: Optional[datetime] = None) -> str:
        report = await self.build_report(now)
        await self.slack.post_message(self.settings.slack_channel, report)
        return report

    async def close(self) -> None:
        await self.geekbot.close()
        await self.slack.close()


def create_service(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> ReportService:
    geekbot = GeekbotClient(
        settings.geekbot_token,
        base_url=settings.geekbot_api_url,
        timeout=settings.http_timeout,
        transport=transport,
    )
    slack = SlackClient(
        settings.slack_token,
        base_url=settings.slack_api_url,
        timeout=settings.http_timeout,
        transport=transport,
    )
    return ReportService(settings, geekbot, slack)


async def run_report(
    settings: Settings,
    now: Optional[datetime] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    service = create_service(settings, transport)
    try:
        return await service.run(now)
    finally:
        await service.close()


__all__ = ["ReportService", "create_service", "run_report"]
