"""
Analyze a GitHub user's commit history and draw it as an SVG card.
"""

from __future__ import annotations

from .analyzer import analyze
from .cache import JsonFileStore, MemoryStore, TTLStore, cache_key
from .errors import (
    AccessDeniedError,
    CacheError,
    CardError,
    CommitaError,
    InvalidUsernameError,
    RateLimitError,
    UpstreamError,
    UserNotFoundError,
)
from .models import (
    AnalysisResult,
    CommitRecord,
    DayCount,
    HourCount,
    MessageInsights,
    RenderOptions,
    StreakInfo,
)
from .sanitize import escape_svg_text, truncate
from .service import cache_control, get_analysis
from .svg import render_card, write_cards

__all__: list[str] = [
    "AccessDeniedError",
    "AnalysisResult",
    "CacheError",
    "CardError",
    "CommitRecord",
    "CommitaError",
    "DayCount",
    "HourCount",
    "InvalidUsernameError",
    "JsonFileStore",
    "MemoryStore",
    "MessageInsights",
    "RateLimitError",
    "RenderOptions",
    "StreakInfo",
    "TTLStore",
    "UpstreamError",
    "UserNotFoundError",
    "analyze",
    "cache_control",
    "cache_key",
    "escape_svg_text",
    "get_analysis",
    "render_card",
    "truncate",
    "write_cards",
]
