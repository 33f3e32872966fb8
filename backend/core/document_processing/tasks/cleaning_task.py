"""
Markup cleanup for rich-text chat messages.

Message bodies arrive as editor HTML. Scripts and styles are dropped,
block-level tags become line breaks, remaining tags are removed,
entities are unescaped and whitespace is collapsed.

Dependencies: html, re (stdlib)
System role: Cleaning stage of message ingestion
"""

import html
import re

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_BLOCK_BREAK_RE = re.compile(r"<\s*(br|/p|/div|/li|/h[1-6]|/blockquote|/pre|/tr)\b[^>]*>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_INLINE_SPACE_RE = re.compile(r"[ \t\r\f\v]+")
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")


def strip_markup(raw: str | None) -> str:
    """
    Reduce rich-text markup to plain text.

    Args:
        raw: Message body, possibly containing HTML

    Returns:
        str: Plain text with collapsed whitespace, empty when nothing remains
    """
    if not raw:
        return ""

    text = _SCRIPT_STYLE_RE.sub(" ", raw)
    text = _BLOCK_BREAK_RE.sub("\n", text)
    text = _TAG_RE.sub(" ", text)
    text = html.unescape(text).replace("\xa0", " ")
    text = _INLINE_SPACE_RE.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = _BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()
