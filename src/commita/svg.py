"""
Functions for drawing the SVG insights card.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import floor
from pathlib import PurePath
from typing import TYPE_CHECKING

from lxml.etree import XMLSyntaxError, fromstring as lxml_fromstring

from .consts import (
    BOTTOM_PAD,
    CHART_GAP,
    DAY_BAR_GAP,
    DAY_BAR_H,
    DAY_COUNT_W,
    DAY_LABEL_W,
    DAYS,
    DIVIDER_GAP,
    ENCODING,
    FACTS_GAP,
    FACTS_HEADER_GAP,
    FONT,
    FOOTER,
    HANDLE_OFFSET,
    HEADER_GAP,
    HOUR_LABEL_H,
    HOURS,
    LINE_SPACING,
    MESSAGE_BUDGET,
    PAD,
    SECTION_GAP,
    STATS_H,
    STATS_Y,
    THEMES,
    TITLE_Y,
)
from .errors import CardError
from .models import RenderOptions
from .sanitize import escape_svg_text, truncate
from .utils import format_hour, group_thousands

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from .consts import Palette, ThemeName
    from .models import AnalysisResult


@dataclass(frozen=True)
class _Layout:
    width: int
    height: int
    half_width: float
    right_x: float
    section_header_y: int
    charts_y: int
    day_bars_h: int
    hour_chart_h: int
    divider_y: int
    facts_header_y: int
    facts_start_y: int


def render_card(analysis: AnalysisResult, options: RenderOptions | None = None) -> str:
    """
    Draw `analysis` as a self-contained SVG document.

    Args:
        analysis: Statistics to draw.
        options:  Theme and width. Light theme, 495px wide by default.

    Return:
        str: SVG markup, identical for identical arguments.

    """

    if options is None:
        options = RenderOptions()

    theme: Palette = THEMES[options.theme]
    facts: list[tuple[str, str]] = _fun_facts(analysis, theme)
    layout: _Layout = _compute_layout(options.width, len(facts))

    width, height = layout.width, layout.height
    handle: str = escape_svg_text(analysis.username)

    parts: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" fill="none">',
        f'<rect width="{width}" height="{height}" rx="6" fill="{theme["bg"]}" '
        f'stroke="{theme["border"]}" stroke-width="1"/>',
        _text(PAD, TITLE_Y, theme["title"], 16, "Commita", weight=700),
        _text(PAD + HANDLE_OFFSET, TITLE_Y, theme["muted"], 14, f"@{handle}"),
        _stats_row(analysis, theme, PAD - 5, STATS_Y, width - (PAD - 5) * 2, STATS_H),
        _text(
            PAD, layout.section_header_y, theme["title"], 12, "Most Active Days",
            weight=600,
        ),
        _day_bars(analysis, theme, PAD, layout.charts_y, layout.half_width),
        _text(
            layout.right_x, layout.section_header_y, theme["title"], 12,
            "Commits by Hour (UTC)", weight=600,
        ),
        _hour_chart(
            analysis, theme, layout.right_x, layout.charts_y,
            layout.half_width, layout.hour_chart_h,
        ),
        f'<line x1="{PAD}" y1="{layout.divider_y}" x2="{width - PAD}" '
        f'y2="{layout.divider_y}" stroke="{theme["border"]}" stroke-width="0.5"/>',
        _text(PAD, layout.facts_header_y, theme["title"], 12, "Fun Facts", weight=600),
    ]

    for i, (fill, fact) in enumerate(facts):
        y = layout.facts_start_y + LINE_SPACING * i
        parts.append(_text(PAD, y, fill, 11, fact))

    parts.append(
        _text(width - PAD, height - 10, theme["muted"], 9, FOOTER, anchor="end")
    )
    parts.append("</svg>")

    return "\n".join(parts) + "\n"


def write_cards(
    analysis: AnalysisResult,
    out_dir: Path,
    themes: Iterable[ThemeName] = ("light", "dark"),
    width: int | None = None,
) -> list[Path]:
    """
    Render one card per theme and write them to `out_dir`.

    Args:
        analysis: Statistics to draw.
        out_dir:  Directory the cards are written to.
        themes:   Palettes to render.
        width:    Card width, default width if not provided.

    Return:
        list[Path]: Paths of the written cards.

    Raises:
        CardError: When a card is not well-formed XML or cannot be written.

    """

    written: list[Path] = []

    for theme in themes:
        options = (
            RenderOptions(theme=theme)
            if width is None
            else RenderOptions(theme=theme, width=width)
        )
        svg: str = render_card(analysis, options)
        # keep the card inside out_dir whatever the username holds
        stem: str = PurePath(analysis.username).name or "card"
        svg_path: Path = out_dir / f"{stem}-{theme}.svg"

        try:
            lxml_fromstring(svg.encode(ENCODING))
            out_dir.mkdir(parents=True, exist_ok=True)
            svg_path.write_text(svg, encoding=ENCODING)
        except (OSError, XMLSyntaxError) as e:
            msg = f"SVG write failed: {e!s}"
            raise CardError(msg) from e

        written.append(svg_path)

    return written


def _compute_layout(width: int, fact_count: int) -> _Layout:
    """
    Stack the card sections top to bottom.

    Args:
        width:      Card width.
        fact_count: Number of lines in the fun facts block.

    Return:
        _Layout: Vertical offsets of every section and the card height.

    """

    section_header_y = STATS_Y + STATS_H + SECTION_GAP
    charts_y = section_header_y + HEADER_GAP
    day_bars_h = len(DAYS) * (DAY_BAR_H + DAY_BAR_GAP) - DAY_BAR_GAP
    divider_y = charts_y + day_bars_h + DIVIDER_GAP
    facts_header_y = divider_y + FACTS_HEADER_GAP
    facts_start_y = facts_header_y + FACTS_GAP
    half_width = (width - PAD * 2 - CHART_GAP) / 2

    return _Layout(
        width=width,
        height=facts_start_y + LINE_SPACING * fact_count + BOTTOM_PAD,
        half_width=half_width,
        right_x=PAD + half_width + CHART_GAP,
        section_header_y=section_header_y,
        charts_y=charts_y,
        day_bars_h=day_bars_h,
        hour_chart_h=day_bars_h - HOUR_LABEL_H,
        divider_y=divider_y,
        facts_header_y=facts_header_y,
        facts_start_y=facts_start_y,
    )


def _fun_facts(analysis: AnalysisResult, theme: Palette) -> list[tuple[str, str]]:
    """
    Build each fun facts line as a (fill, escaped body) pair.
    """

    insights = analysis.message_insights
    shortest = escape_svg_text(truncate(insights.shortest, MESSAGE_BUDGET))
    longest = escape_svg_text(truncate(insights.longest, MESSAGE_BUDGET))

    def label(text: str) -> str:
        return f'<tspan font-weight="500" fill="{theme["accent"]}">{text}</tspan>'

    lines: list[str] = [
        f"{label('Busiest day:')} {escape_svg_text(analysis.busiest_date)} "
        f"({group_thousands(analysis.busiest_date_count)} commits)",
        f"{label('Peak hour:')} {format_hour(analysis.most_productive_hour)} UTC "
        f"&#183; {label('Fav day:')} {escape_svg_text(analysis.most_active_day)}",
        f"{label('Shortest msg:')} &quot;{shortest}&quot;",
        f"{label('Longest msg:')} &quot;{longest}&quot;",
    ]
    facts: list[tuple[str, str]] = [(theme["text"], line) for line in lines]

    if insights.top_emojis:
        emojis = " ".join(escape_svg_text(e) for e in insights.top_emojis)
        facts.append(
            (
                theme["muted"],
                f"Top emojis: {emojis} ({group_thousands(insights.emoji_count)} total)",
            )
        )

    return facts


def _stats_row(
    analysis: AnalysisResult,
    theme: Palette,
    box_x: float,
    box_y: float,
    box_w: float,
    box_h: float,
) -> str:
    stats: list[tuple[str, str, str]] = [
        (group_thousands(analysis.total_commits), "Commits", theme["accent"]),
        (group_thousands(analysis.repos_scanned), "Repos", theme["accent"]),
        (f"{analysis.streak.longest}d", "Best Streak", theme["streak"]),
        (f"{analysis.streak.current}d", "Current Streak", theme["streak"]),
    ]
    col_w = box_w / len(stats)

    parts: list[str] = [
        f'<rect x="{_n(box_x)}" y="{_n(box_y)}" width="{_n(box_w)}" '
        f'height="{_n(box_h)}" rx="5" fill="{theme["card_bg"]}" '
        f'stroke="{theme["section_border"]}" stroke-width="0.5"/>'
    ]
    for i, (value, caption, color) in enumerate(stats):
        cx = box_x + col_w * i + col_w / 2
        parts.append(_text(cx, box_y + 22, color, 18, value, weight=700, anchor="middle"))
        parts.append(_text(cx, box_y + 40, theme["muted"], 11, caption, anchor="middle"))

    return "\n".join(parts)


def _day_bars(
    analysis: AnalysisResult, theme: Palette, x: float, y: float, width: float
) -> str:
    max_count = max([d.count for d in analysis.day_distribution] + [1])
    max_bar_w = width - DAY_LABEL_W - DAY_COUNT_W - 10

    parts: list[str] = []
    for i, bucket in enumerate(analysis.day_distribution):
        bar_w = max(bucket.count / max_count * max_bar_w, 2)
        y_pos = y + i * (DAY_BAR_H + DAY_BAR_GAP)
        is_max = bucket.day == analysis.most_active_day

        parts.append(
            _text(
                x, y_pos + 10, theme["accent"] if is_max else theme["text"], 11,
                escape_svg_text(bucket.day[:3]), weight=600 if is_max else 400,
            )
        )
        parts.append(
            f'<rect x="{_n(x + DAY_LABEL_W)}" y="{_n(y_pos)}" width="{_n(bar_w)}" '
            f'height="{DAY_BAR_H}" rx="3" '
            f'fill="{theme["accent"] if is_max else theme["bar_bg"]}" '
            f'opacity="{1 if is_max else 0.6}"/>'
        )
        parts.append(
            _text(
                x + DAY_LABEL_W + bar_w + 5, y_pos + 10, theme["muted"], 10,
                group_thousands(bucket.count),
            )
        )

    return "\n".join(parts)


def _hour_chart(
    analysis: AnalysisResult,
    theme: Palette,
    x: float,
    y: float,
    width: float,
    chart_h: float,
) -> str:
    max_count = max([h.count for h in analysis.hour_distribution] + [1])
    gap = 1
    bar_w = max(floor((width - gap * (HOURS - 1)) / HOURS), 1)

    parts: list[str] = []
    for i, bucket in enumerate(analysis.hour_distribution):
        # zero-count hours keep a one unit baseline tick
        bar_h = max(bucket.count / max_count * chart_h, 1)
        is_max = bucket.hour == analysis.most_productive_hour

        parts.append(
            f'<rect x="{_n(x + i * (bar_w + gap))}" y="{_n(y + chart_h - bar_h)}" '
            f'width="{bar_w}" height="{_n(bar_h)}" rx="1" '
            f'fill="{theme["accent"] if is_max else theme["bar_fill"]}" '
            f'opacity="{1 if is_max else 0.3}"/>'
        )

    for hour in (0, 6, 12, 18):
        parts.append(
            _text(
                x + hour * (bar_w + gap), y + chart_h + 14, theme["muted"], 9,
                format_hour(hour),
            )
        )

    return "\n".join(parts)


def _text(
    x: float,
    y: float,
    fill: str,
    size: int,
    body: str,
    weight: int | None = None,
    anchor: str | None = None,
) -> str:
    """
    Build a `<text>` element. `body` must already be escaped.
    """

    attrs: str = f'x="{_n(x)}" y="{_n(y)}" fill="{fill}" font-size="{size}"'
    if weight is not None:
        attrs += f' font-weight="{weight}"'
    attrs += f' font-family="{FONT}"'
    if anchor is not None:
        attrs += f' text-anchor="{anchor}"'

    return f"<text {attrs}>{body}</text>"


def _n(v: float) -> str:
    """
    Format a coordinate with at most two decimals.
    """

    if float(v).is_integer():
        return str(int(v))

    return f"{v:.2f}".rstrip("0").rstrip(".")
