"""
Functions for binning commits by weekday and by hour.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .consts import DAYS, HOURS
from .models import DayCount, HourCount

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import datetime


def day_distribution(stamps: Iterable[datetime]) -> tuple[DayCount, ...]:
    """
    Count commits per UTC weekday.

    Args:
        stamps: UTC commit timestamps.

    Return:
        tuple[DayCount, ...]: Seven buckets, Sunday first.

    """

    counts: list[int] = [0] * len(DAYS)
    for stamp in stamps:
        # isoweekday(): Monday=1 .. Sunday=7
        counts[stamp.isoweekday() % 7] += 1

    return tuple(DayCount(day=day, count=counts[i]) for i, day in enumerate(DAYS))


def hour_distribution(stamps: Iterable[datetime]) -> tuple[HourCount, ...]:
    """
    Count commits per UTC hour of day.

    Args:
        stamps: UTC commit timestamps.

    Return:
        tuple[HourCount, ...]: Twenty-four buckets, midnight first.

    """

    counts: list[int] = [0] * HOURS
    for stamp in stamps:
        counts[stamp.hour] += 1

    return tuple(HourCount(hour=hour, count=count) for hour, count in enumerate(counts))


def most_active_day(days: Sequence[DayCount]) -> str:
    """
    Pick the busiest weekday; the earliest day in the week wins a tie.
    """

    best: DayCount = days[0]
    for bucket in days[1:]:
        if bucket.count > best.count:
            best = bucket

    return best.day


def most_productive_hour(hours: Sequence[HourCount]) -> int:
    best: HourCount = hours[0]
    for bucket in hours[1:]:
        if bucket.count > best.count:
            best = bucket

    return best.hour
