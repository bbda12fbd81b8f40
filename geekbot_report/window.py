"""Work-day aware date arithmetic for the report window.

All values here are naive datetimes on the local wall clock of the process,
and days of the week use the 0 = Sunday numbering of the ``work-days`` input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import AbstractSet, Optional

from .config import Settings
from .models import TimeOfDay

ONE_DAY = timedelta(days=1)


@dataclass(slots=True, frozen=True)
class ReportWindow:
    """Lower bound of the check-in query plus the work days it spans."""

    start: datetime
    after: int
    work_day_count: int
    include_today: bool


def day_of_week(moment: datetime) -> int:
    return (moment.weekday() + 1) % 7


def hours_difference(moment: datetime, reference: TimeOfDay) -> float:
    """Fractional hours between the wall-clock time of ``moment`` and ``reference``."""

    return moment.hour - reference.hours + (moment.minute - reference.minutes) / 60


def _require_work_days(work_days: AbstractSet[int]) -> None:
    if not work_days:
        raise ValueError("work_days must contain at least one day")


def previous_work_day(moment: datetime, work_days: AbstractSet[int]) -> datetime:
    _require_work_days(work_days)
    candidate = moment - ONE_DAY
    while day_of_week(candidate) not in work_days:
        candidate -= ONE_DAY
    return candidate


def subtract_work_days(moment: datetime, work_days: AbstractSet[int], day_count: int) -> datetime:
    """Step back ``day_count`` work days from ``moment``, keeping its time of day."""

    _require_work_days(work_days)
    if day_count < 0:
        raise ValueError("day_count must not be negative")
    result = moment
    for _ in range(day_count):
        result = previous_work_day(result, work_days)
    return result


def count_work_days(start: datetime, work_days: AbstractSet[int], day_count: int) -> int:
    """Count work days among the ``day_count`` calendar days beginning at ``start``."""

    return sum(
        1 for offset in range(day_count) if day_of_week(start + offset * ONE_DAY) in work_days
    )


def include_current_day(
    now: datetime,
    work_days: AbstractSet[int],
    start_time: TimeOfDay,
    due_by_time: Optional[TimeOfDay] = None,
) -> bool:
    # Today counts once check-ins are due, or half a day after the start time
    # when no due-by time is configured.
    if day_of_week(now) not in work_days:
        return False
    if due_by_time is not None:
        return hours_difference(now, due_by_time) >= 0
    return hours_difference(now, start_time) >= 12


def compute_window(settings: Settings, now: Optional[datetime] = None) -> ReportWindow:
    now = now or datetime.now()
    include_today = include_current_day(
        now, settings.work_days, settings.start_time, settings.due_by_time
    )
    boundary = subtract_work_days(
        now, settings.work_days, settings.duration - (1 if include_today else 0)
    )
    # Only hour and minute are overwritten; seconds carry over from ``now``.
    boundary = boundary.replace(
        hour=settings.start_time.hours, minute=settings.start_time.minutes
    )
    return ReportWindow(
        start=boundary,
        after=math.floor(boundary.timestamp()),
        work_day_count=count_work_days(boundary, settings.work_days, settings.duration),
        include_today=include_today,
    )


__all__ = [
    "ReportWindow",
    "compute_window",
    "count_work_days",
    "day_of_week",
    "hours_difference",
    "include_current_day",
    "previous_work_day",
    "subtract_work_days",
]
