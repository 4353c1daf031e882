"""
Data models shared by the analyzer, the renderer and their collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .consts import DEFAULT_THEME, DEFAULT_WIDTH, THEMES, ThemeName

JsonDict = dict[str, Any]


@dataclass(frozen=True)
class CommitRecord:
    """
    One commit authored by the user.

    Attributes:
        id:        Commit SHA.
        message:   First line of the commit message.
        timestamp: ISO8601 instant the commit was authored.
        repo:      Name of the repository it belongs to.

    """

    id: str
    message: str
    timestamp: str
    repo: str


@dataclass(frozen=True)
class DayCount:
    day: str
    count: int


@dataclass(frozen=True)
class HourCount:
    hour: int
    count: int


@dataclass(frozen=True)
class StreakInfo:
    longest: int = 0
    longest_start: str | None = None
    longest_end: str | None = None
    current: int = 0


@dataclass(frozen=True)
class MessageInsights:
    shortest: str = ""
    shortest_date: str = ""
    longest: str = ""
    longest_date: str = ""
    average_length: int = 0
    emoji_count: int = 0
    top_emojis: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalysisResult:
    """
    Aggregated statistics for one user's commit history.

    Built once by `analyze()` and never mutated afterwards.
    """

    username: str
    total_commits: int
    repos_scanned: int
    day_distribution: tuple[DayCount, ...]
    hour_distribution: tuple[HourCount, ...]
    most_active_day: str
    most_productive_hour: int
    busiest_date: str
    busiest_date_count: int
    streak: StreakInfo = field(default_factory=StreakInfo)
    message_insights: MessageInsights = field(default_factory=MessageInsights)

    def to_dict(self) -> JsonDict:
        """
        Serialize to the camelCase JSON shape served to API consumers.

        Return:
            JsonDict: JSON-compatible dictionary.

        """

        return {
            "username": self.username,
            "totalCommits": self.total_commits,
            "reposScanned": self.repos_scanned,
            "dayDistribution": [
                {"day": d.day, "count": d.count} for d in self.day_distribution
            ],
            "hourDistribution": [
                {"hour": h.hour, "count": h.count} for h in self.hour_distribution
            ],
            "mostActiveDay": self.most_active_day,
            "mostProductiveHour": self.most_productive_hour,
            "busiestDate": self.busiest_date,
            "busiestDateCount": self.busiest_date_count,
            "streak": {
                "longest": self.streak.longest,
                "longestStart": self.streak.longest_start,
                "longestEnd": self.streak.longest_end,
                "current": self.streak.current,
            },
            "messageInsights": {
                "shortest": self.message_insights.shortest,
                "shortestDate": self.message_insights.shortest_date,
                "longest": self.message_insights.longest,
                "longestDate": self.message_insights.longest_date,
                "averageLength": self.message_insights.average_length,
                "emojiCount": self.message_insights.emoji_count,
                "topEmojis": list(self.message_insights.top_emojis),
            },
        }

    @classmethod
    def from_dict(cls, data: JsonDict) -> AnalysisResult:
        """
        Rebuild a result from the dictionary produced by `to_dict()`.

        Args:
            data: Serialized analysis.

        Return:
            AnalysisResult: Equivalent immutable result.

        Raises:
            KeyError:  When a required key is missing.
            TypeError: When a value has the wrong shape.

        """

        streak: JsonDict = data["streak"]
        insights: JsonDict = data["messageInsights"]

        return cls(
            username=data["username"],
            total_commits=int(data["totalCommits"]),
            repos_scanned=int(data["reposScanned"]),
            day_distribution=tuple(
                DayCount(day=d["day"], count=int(d["count"]))
                for d in data["dayDistribution"]
            ),
            hour_distribution=tuple(
                HourCount(hour=int(h["hour"]), count=int(h["count"]))
                for h in data["hourDistribution"]
            ),
            most_active_day=data["mostActiveDay"],
            most_productive_hour=int(data["mostProductiveHour"]),
            busiest_date=data["busiestDate"],
            busiest_date_count=int(data["busiestDateCount"]),
            streak=StreakInfo(
                longest=int(streak["longest"]),
                longest_start=streak["longestStart"],
                longest_end=streak["longestEnd"],
                current=int(streak["current"]),
            ),
            message_insights=MessageInsights(
                shortest=insights["shortest"],
                shortest_date=insights["shortestDate"],
                longest=insights["longest"],
                longest_date=insights["longestDate"],
                average_length=int(insights["averageLength"]),
                emoji_count=int(insights["emojiCount"]),
                top_emojis=tuple(insights["topEmojis"]),
            ),
        )


@dataclass(frozen=True)
class RenderOptions:
    """
    Card appearance: which palette to draw with and how wide the card is.
    """

    theme: ThemeName = DEFAULT_THEME
    width: int = DEFAULT_WIDTH

    def __post_init__(self) -> None:
        if self.theme not in THEMES:
            msg = f"Unknown theme: {self.theme!r}"
            raise ValueError(msg)

        if isinstance(self.width, bool) or not isinstance(self.width, int):
            msg = f"Card width must be an integer, got {self.width!r}"
            raise ValueError(msg)

        if self.width <= 0:
            msg = f"Card width must be positive, got {self.width}"
            raise ValueError(msg)
