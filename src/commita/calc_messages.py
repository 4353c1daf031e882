"""
Functions for commit message statistics.
"""

from __future__ import annotations

from collections import Counter
from math import floor
from typing import TYPE_CHECKING

import regex

from .consts import EMOJI_PATTERN, TOP_EMOJI_LIMIT
from .models import MessageInsights
from .utils import to_date_str

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

_EMOJI_RE = regex.compile(EMOJI_PATTERN)


def find_emojis(text: str) -> list[str]:
    """
    Find every emoji code point in `text`, in order of appearance.

    A code point counts when Unicode gives it the `Emoji_Presentation` or
    `Extended_Pictographic` property.

    Args:
        text: Text to scan.

    Return:
        list[str]: Matched emoji, repeats included.

    """

    return _EMOJI_RE.findall(text)


def calc_message_insights(
    messages: Sequence[str], dates: Sequence[date]
) -> MessageInsights:
    """
    Summarize commit messages.

    Args:
        messages: First line of each commit message.
        dates:    UTC date of each commit, parallel to `messages`.

    Return:
        MessageInsights: Shortest/longest message with their dates, rounded
                         average length and emoji usage.

    """

    if not messages:
        return MessageInsights()

    shortest_idx: int = 0
    longest_idx: int = 0
    total_length: int = 0
    emojis: Counter[str] = Counter()

    for i, msg in enumerate(messages):
        total_length += len(msg)

        if len(msg) < len(messages[shortest_idx]):
            shortest_idx = i
        if len(msg) > len(messages[longest_idx]):
            longest_idx = i

        emojis.update(find_emojis(msg))

    return MessageInsights(
        shortest=messages[shortest_idx],
        shortest_date=to_date_str(dates[shortest_idx]),
        longest=messages[longest_idx],
        longest_date=to_date_str(dates[longest_idx]),
        average_length=floor(total_length / len(messages) + 0.5),
        emoji_count=sum(emojis.values()),
        # most_common() keeps first-seen order among equal counts
        top_emojis=tuple(e for e, _ in emojis.most_common(TOP_EMOJI_LIMIT)),
    )
