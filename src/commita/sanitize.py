"""
Helpers that make user-supplied text safe to embed in SVG markup.
"""

from __future__ import annotations

import re
from xml.sax.saxutils import escape

from .consts import ELLIPSIS

_QUOTE_ENTITIES: dict[str, str] = {'"': "&quot;", "'": "&apos;"}
# code points outside the XML 1.0 Char production
_INVALID_XML_RE = re.compile(
    "[^\u0009\u000A\u000D\u0020-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]"
)
REPLACEMENT: str = "\uFFFD"


def escape_svg_text(text: str) -> str:
    """
    Escape the five XML-reserved characters.

    Code points XML cannot carry at all, such as control characters and
    lone surrogates, are replaced with U+FFFD first.

    Args:
        text: Raw text, e.g. a username or commit message.

    Return:
        str: Text with `& < > " '` replaced by entity references.

    """

    return escape(_INVALID_XML_RE.sub(REPLACEMENT, text), _QUOTE_ENTITIES)


def truncate(text: str, max_length: int) -> str:
    """
    Cut `text` down to `max_length` characters, ending in an ellipsis.

    Args:
        text:       Text to shorten.
        max_length: Character budget.

    Return:
        str: `text` unchanged if it fits, otherwise exactly `max_length`
             characters with the last one replaced by an ellipsis.

    """

    if len(text) <= max_length:
        return text

    if max_length <= 0:
        return ""

    return text[: max_length - 1] + ELLIPSIS
