"""Dataclasses representing Geekbot report domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(slots=True, frozen=True)
class TimeOfDay:
    hours: int
    minutes: int

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}"


@dataclass(slots=True, frozen=True)
class CheckInRecord:
    realname: str
    timestamp: int

    @property
    def submitted_at(self) -> datetime:
        """Submission time on the local wall clock."""

        return datetime.fromtimestamp(self.timestamp)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "CheckInRecord":
        member = payload.get("member") or {}
        realname = member.get("realname")
        timestamp = payload.get("timestamp")
        if realname is None or timestamp is None:
            raise KeyError("report is missing timestamp or member.realname")
        return cls(realname=str(realname), timestamp=int(timestamp))


__all__ = ["TimeOfDay", "CheckInRecord"]
