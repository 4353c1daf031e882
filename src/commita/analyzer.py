"""
Derive activity statistics from a user's commit history.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .calc_dates import busiest_date, calc_streaks
from .calc_distribution import (
    day_distribution,
    hour_distribution,
    most_active_day,
    most_productive_hour,
)
from .calc_messages import calc_message_insights
from .models import AnalysisResult
from .utils import from_iso_z, utc_today

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date, datetime

    from .models import CommitRecord


def analyze(
    username: str,
    commits: Sequence[CommitRecord],
    repos_scanned: int,
    today: date | None = None,
) -> AnalysisResult:
    """
    Aggregate a commit list into an `AnalysisResult`.

    All bucketing is done in UTC. The result only depends on the arguments,
    plus the current UTC date when `today` is not given.

    Args:
        username:      Owner of the commits.
        commits:       Commits in the order they were collected.
        repos_scanned: Number of repositories the commits came from.
        today:         UTC date the current streak is measured against.

    Return:
        AnalysisResult: Distributions, streaks, busiest date and message
                        insights. Zero-filled when `commits` is empty.

    """

    if today is None:
        today = utc_today()

    stamps: list[datetime] = [from_iso_z(c.timestamp) for c in commits]
    dates: list[date] = [s.date() for s in stamps]

    days = day_distribution(stamps)
    hours = hour_distribution(stamps)
    top_date, top_date_count = busiest_date(dates)

    return AnalysisResult(
        username=username,
        total_commits=len(commits),
        repos_scanned=repos_scanned,
        day_distribution=days,
        hour_distribution=hours,
        most_active_day=most_active_day(days),
        most_productive_hour=most_productive_hour(hours),
        busiest_date=top_date,
        busiest_date_count=top_date_count,
        streak=calc_streaks(dates, today),
        message_insights=calc_message_insights([c.message for c in commits], dates),
    )
