"""
Functions for calendar-date statistics: busiest date and commit streaks.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from .models import StreakInfo
from .utils import to_date_str

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date

ONE_DAY = timedelta(days=1)


def busiest_date(dates: Iterable[date]) -> tuple[str, int]:
    """
    Find the calendar date with the most commits.

    Dates are counted in the order they are given; when two dates share the
    highest count, the one seen first in that order is kept.

    Args:
        dates: UTC commit dates, one per commit.

    Return:
        (str, int): Busiest date as `YYYY-MM-DD` and its commit count,
                    or `("", 0)` when there are no dates.

    """

    counts: dict[date, int] = {}
    for d in dates:
        counts[d] = counts.get(d, 0) + 1

    best: date | None = None
    best_count: int = 0
    for d, count in counts.items():
        if count > best_count:
            best, best_count = d, count

    if best is None:
        return "", 0

    return to_date_str(best), best_count


def calc_streaks(dates: Iterable[date], today: date) -> StreakInfo:
    """
    Calculate the longest and the current run of consecutive commit days.

    Args:
        dates: UTC commit dates, duplicates allowed.
        today: Current UTC date, anchor for the current streak.

    Return:
        StreakInfo: Longest run with its bounds, plus the current run.

    """

    days: list[date] = sorted(set(dates))
    if not days:
        return StreakInfo()

    longest, longest_start, longest_end = _longest_run(days)

    return StreakInfo(
        longest=longest,
        longest_start=to_date_str(longest_start),
        longest_end=to_date_str(longest_end),
        current=_current_run(days, today),
    )


def _longest_run(days: Sequence[date]) -> tuple[int, date, date]:
    longest: int = 1
    longest_start: date = days[0]
    longest_end: date = days[0]

    run: int = 1
    run_start: date = days[0]

    for prev, curr in zip(days, days[1:]):
        if curr - prev == ONE_DAY:
            run += 1
        else:
            run = 1
            run_start = curr

        # strict comparison keeps the earliest run on ties
        if run > longest:
            longest, longest_start, longest_end = run, run_start, curr

    return longest, longest_start, longest_end


def _current_run(days: Sequence[date], today: date) -> int:
    present: set[date] = set(days)

    if today in present:
        cursor = today
    elif today - ONE_DAY in present:
        cursor = today - ONE_DAY
    else:
        return 0

    run: int = 0
    while cursor in present:
        run += 1
        cursor -= ONE_DAY

    return run
