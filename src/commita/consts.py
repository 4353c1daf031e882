"""
Constants used by the analyzer and the card renderer.
"""

from __future__ import annotations

from typing import Literal

ThemeName = Literal["light", "dark"]
Palette = dict[str, str]

ENCODING: str = "utf-8"

DAYS: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
HOURS: int = 24

EMOJI_PATTERN: str = r"[\p{Emoji_Presentation}\p{Extended_Pictographic}]"
TOP_EMOJI_LIMIT: int = 5

MESSAGE_BUDGET: int = 40
ELLIPSIS: str = "…"

DEFAULT_THEME: ThemeName = "light"
DEFAULT_WIDTH: int = 495

THEMES: dict[str, Palette] = {
    "light": {
        "bg": "#ffffff",
        "card_bg": "#f6f8fa",
        "border": "#d0d7de",
        "title": "#24292f",
        "text": "#57606a",
        "accent": "#0969da",
        "muted": "#8b949e",
        "bar_bg": "#e1e4e8",
        "bar_fill": "#0969da",
        "section_border": "#d0d7de",
        "streak": "#1a7f37",
    },
    "dark": {
        "bg": "#0d1117",
        "card_bg": "#161b22",
        "border": "#30363d",
        "title": "#f0f6fc",
        "text": "#c9d1d9",
        "accent": "#58a6ff",
        "muted": "#8b949e",
        "bar_bg": "#21262d",
        "bar_fill": "#58a6ff",
        "section_border": "#30363d",
        "streak": "#3fb950",
    },
}

FONT: str = "'Segoe UI', Ubuntu, sans-serif"
FOOTER: str = "commita.dev"

# card geometry
PAD: int = 20
TITLE_Y: int = 30
HANDLE_OFFSET: int = 68
STATS_Y: int = 48
STATS_H: int = 52
SECTION_GAP: int = 22
HEADER_GAP: int = 14
DAY_BAR_H: int = 12
DAY_BAR_GAP: int = 5
DAY_LABEL_W: int = 32
DAY_COUNT_W: int = 30
CHART_GAP: int = 20
HOUR_LABEL_H: int = 16
DIVIDER_GAP: int = 16
FACTS_HEADER_GAP: int = 20
FACTS_GAP: int = 18
LINE_SPACING: int = 18
BOTTOM_PAD: int = 20
