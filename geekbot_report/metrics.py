"""Participation and lateness aggregation over Geekbot check-ins."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Tuple

from .models import CheckInRecord, TimeOfDay

TOTAL_LABEL = "Total"


def sort_key(name: str) -> Tuple[str, str]:
    return (name.casefold(), name)


@dataclass(slots=True)
class ParticipationMetrics:
    """Check-in counts per participant; the Total row is their mean."""

    counts: Dict[str, int] = field(default_factory=dict)
    record_count: int = 0

    def add(self, name: str) -> None:
        self.counts[name] = self.counts.get(name, 0) + 1
        self.record_count += 1

    def average(self) -> Fraction:
        if not self.counts:
            return Fraction(0)
        return Fraction(self.record_count, len(self.counts))

    def rows(self) -> List[Tuple[str, Fraction]]:
        ordered: List[Tuple[str, Fraction]] = [
            (name, Fraction(self.counts[name])) for name in sorted(self.counts, key=sort_key)
        ]
        ordered.append((TOTAL_LABEL, self.average()))
        return ordered

    def as_dict(self) -> Dict[str, Fraction]:
        return dict(self.rows())


@dataclass(slots=True)
class LatenessMetrics:
    """Late check-in counts per participant; the Total row is their sum."""

    counts: Dict[str, int] = field(default_factory=dict)

    def add(self, name: str) -> None:
        self.counts[name] = self.counts.get(name, 0) + 1

    def total(self) -> int:
        return sum(self.counts.values())

    def get(self, name: str) -> int:
        if name == TOTAL_LABEL:
            return self.total()
        return self.counts.get(name, 0)

    def as_dict(self) -> Dict[str, int]:
        result = {name: self.counts[name] for name in sorted(self.counts, key=sort_key)}
        result[TOTAL_LABEL] = self.total()
        return result


def is_late(submitted: datetime, start_time: TimeOfDay, due_by_time: TimeOfDay) -> bool:
    """Whether ``submitted`` falls outside [start_time, due_by_time] on its own day."""

    submitted_at = (submitted.hour, submitted.minute)
    return submitted_at > (due_by_time.hours, due_by_time.minutes) or submitted_at < (
        start_time.hours,
        start_time.minutes,
    )


def aggregate(
    records: Iterable[CheckInRecord],
    start_time: TimeOfDay,
    due_by_time: Optional[TimeOfDay] = None,
) -> Tuple[ParticipationMetrics, Optional[LatenessMetrics]]:
    participation = ParticipationMetrics()
    lateness = LatenessMetrics() if due_by_time is not None else None
    for record in records:
        participation.add(record.realname)
        if lateness is not None and is_late(record.submitted_at, start_time, due_by_time):
            lateness.add(record.realname)
    return participation, lateness


__all__ = [
    "TOTAL_LABEL",
    "LatenessMetrics",
    "ParticipationMetrics",
    "aggregate",
    "is_late",
]
