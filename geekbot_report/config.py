"""Configuration helpers for the Geekbot report."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import FrozenSet, Optional

from dotenv import load_dotenv

from .models import TimeOfDay

DEFAULT_HEADING = "**Geekbot Participation Summary**"
DEFAULT_START_TIME = TimeOfDay(hours=6, minutes=0)
DEFAULT_WORK_DAYS: FrozenSet[int] = frozenset({1, 2, 3, 4, 5})
GEEKBOT_API_BASE = "https://api.geekbot.com"
SLACK_API_BASE = "https://slack.com/api"

BASIS_DURATION = "duration"
BASIS_WORK_DAYS = "work-days"
PERCENTAGE_BASES = (BASIS_DURATION, BASIS_WORK_DAYS)

_TIME_PATTERN = re.compile(r"^\d\d:\d\d$")


class ConfigError(ValueError):
    """Raised when a configuration input is missing or malformed."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Runtime configuration values loaded from the action environment."""

    geekbot_token: str
    slack_token: str
    slack_channel: str
    heading: str = DEFAULT_HEADING
    duration: int = len(DEFAULT_WORK_DAYS)
    start_time: TimeOfDay = DEFAULT_START_TIME
    due_by_time: Optional[TimeOfDay] = None
    work_days: FrozenSet[int] = DEFAULT_WORK_DAYS
    percentage_basis: str = BASIS_DURATION
    geekbot_api_url: str = GEEKBOT_API_BASE
    slack_api_url: str = SLACK_API_BASE
    http_timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.duration < 1:
            raise ConfigError("duration must be at least 1")
        if not self.work_days:
            raise ConfigError("work-days must name at least one day")
        if any(day < 0 or day > 6 for day in self.work_days):
            raise ConfigError("work-days must only contain days 0-6")
        if self.percentage_basis not in PERCENTAGE_BASES:
            raise ConfigError(
                f"percentage-basis must be one of: {', '.join(PERCENTAGE_BASES)}"
            )
        for name, value in (("start-time", self.start_time), ("due-by-time", self.due_by_time)):
            if value is None:
                continue
            if not 0 <= value.hours <= 23:
                raise ConfigError(f"{name}: there are only 24 hours in a day")
            if not 0 <= value.minutes <= 59:
                raise ConfigError(f"{name}: there are only 60 minutes in an hour")


def parse_time(name: str, value: str) -> TimeOfDay:
    if not _TIME_PATTERN.match(value):
        raise ConfigError(f"{name} should be in hh:mm format")
    hours_raw, minutes_raw = value.split(":")
    hours = int(hours_raw)
    if hours > 23:
        raise ConfigError("there are only 24 hours in a day")
    minutes = int(minutes_raw)
    if minutes > 59:
        raise ConfigError("there are only 60 minutes in an hour")
    return TimeOfDay(hours=hours, minutes=minutes)


def parse_work_days(value: str) -> FrozenSet[int]:
    """Parse a string of day digits such as ``"12345"`` (0 = Sunday)."""

    if not value:
        raise ConfigError("work-days must name at least one day")
    if any(char not in "0123456" for char in value):
        raise ConfigError("work-days must be a string of digits 0-6")
    return frozenset(int(char) for char in value)


def parse_duration(value: str) -> int:
    try:
        duration = int(value)
    except ValueError as exc:
        raise ConfigError("duration must be a whole number of days") from exc
    if duration < 1:
        raise ConfigError("duration must be at least 1")
    return duration


def get_input(name: str, *, required: bool = False) -> str:
    """Read an input the way GitHub Actions exposes it, with a plain env fallback."""

    value = os.getenv(f"INPUT_{name.replace(' ', '_').upper()}")
    if value is None:
        value = os.getenv(name.replace("-", "_").upper(), "")
    value = value.strip()
    if required and not value:
        raise ConfigError(f"Input required and not supplied: {name}")
    return value


def load_settings(env_file: str | None = None) -> Settings:
    """Load settings from the environment, optionally from a specific file."""

    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    geekbot_token = get_input("geekbot-token", required=True)
    slack_token = get_input("slack-token", required=True)
    slack_channel = get_input("slack-channel", required=True)
    heading = get_input("heading") or DEFAULT_HEADING

    start_time_raw = get_input("start-time")
    start_time = parse_time("start-time", start_time_raw) if start_time_raw else DEFAULT_START_TIME

    work_days_raw = get_input("work-days")
    work_days = parse_work_days(work_days_raw) if work_days_raw else DEFAULT_WORK_DAYS

    duration_raw = get_input("duration")
    duration = parse_duration(duration_raw) if duration_raw else len(work_days)

    due_by_raw = get_input("due-by-time")
    due_by_time = parse_time("due-by-time", due_by_raw) if due_by_raw else None

    timeout_raw = get_input("http-timeout")
    try:
        http_timeout = float(timeout_raw) if timeout_raw else 10.0
    except ValueError as exc:
        raise ConfigError("http-timeout must be a number of seconds") from exc

    return Settings(
        geekbot_token=geekbot_token,
        slack_token=slack_token,
        slack_channel=slack_channel,
        heading=heading,
        duration=duration,
        start_time=start_time,
        due_by_time=due_by_time,
        work_days=work_days,
        percentage_basis=get_input("percentage-basis") or BASIS_DURATION,
        geekbot_api_url=get_input("geekbot-api-url") or GEEKBOT_API_BASE,
        slack_api_url=get_input("slack-api-url") or SLACK_API_BASE,
        http_timeout=http_timeout,
    )


__all__ = [
    "BASIS_DURATION",
    "BASIS_WORK_DAYS",
    "ConfigError",
    "Settings",
    "load_settings",
    "parse_duration",
    "parse_time",
    "parse_work_days",
]
