"""Caption text cleaning and HTML escaping.

WHY: Provider captions arrive with HTML entities (``&amp;#39;``), sound
tags (``[Music]``, ``[Applause]``) and ragged whitespace. Paragraphs are
built from cleaned text only, and rendered text is always escaped first.

HOW: Ordered regex and string replacements, applied in a fixed sequence:
entity decoding, bracket-tag stripping, whitespace collapsing.

RULES:
- Only the five standard entities and &nbsp; are decoded
- Square-bracket spans are removed non-greedily across the whole string
- Whitespace runs collapse to one space; result is trimmed
- clean_text is total: any string (or None) in, a string out
- escape_html escapes &, < and >; quotes stay literal in text content
"""

from __future__ import annotations

import html
import re

# Entity → replacement, applied in this order. Sequential, so "&amp;lt;"
# decodes all the way to "<".
_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&nbsp;", " "),
)

_BRACKET_TAG_RE = re.compile(r"\[.*?\]")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_END_RE = re.compile(r"[.!?]$")


def clean_text(text: str | None) -> str:
    """Normalize one caption fragment's raw text.

    Returns an empty string for fragments that reduce to nothing; the
    segmenter skips those.
    """
    if not text:
        return ""

    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)

    text = _BRACKET_TAG_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def ends_with_sentence(text: str) -> bool:
    """Return True if the trimmed text ends with ``.``, ``!`` or ``?``."""
    return bool(_SENTENCE_END_RE.search(text.strip()))


def escape_html(text: str) -> str:
    """Escape text for use as HTML element content."""
    return html.escape(text, quote=False)


def escape_attribute(value: str) -> str:
    """Escape text for use inside a double-quoted HTML attribute."""
    return html.escape(value, quote=True)
