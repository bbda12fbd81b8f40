"""Render participation metrics as a fixed-width Slack message."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction
from numbers import Rational
from typing import List, Optional, Union

from .metrics import LatenessMetrics, ParticipationMetrics

CODE_FENCE = "```"
PERCENT_WIDTH = 4


def percentage(count: Union[Rational, float], denominator: int) -> int:
    """Return ``count / denominator`` as a whole percentage, rounding halves up."""

    if denominator < 1:
        raise ValueError("denominator must be at least 1")
    ratio = Fraction(count) * 100 / denominator
    exact = Decimal(ratio.numerator) / Decimal(ratio.denominator)
    return int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_report(
    heading: str,
    participation: ParticipationMetrics,
    lateness: Optional[LatenessMetrics],
    denominator: int,
) -> str:
    rows = participation.rows()
    name_width = max(len(name) + 1 for name, _ in rows)

    lines: List[str] = [heading, CODE_FENCE]
    for name, count in rows:
        label = f"{name}:"
        percent = f"{percentage(count, denominator)}%"
        line = f"{label:<{name_width}} {percent:<{PERCENT_WIDTH}}"
        late_count = lateness.get(name) if lateness is not None else 0
        if late_count:
            line += f" - late: {late_count}"
        lines.append(line)
    lines.append(CODE_FENCE)
    return "\n".join(lines)


__all__ = ["format_report", "percentage"]
