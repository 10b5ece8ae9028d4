"""Highlight annotation of paragraph text.

WHY: Users highlight phrases of a transcript; the renderer must show those
phrases marked in their chosen color and let the UI find each marker by
highlight id. Highlights are stored per source item, not per paragraph,
so every paragraph is searched for every highlight.

HOW: Two rendering modes share the same matching rule (literal text,
case-insensitive, every occurrence, longest highlight first):

  spans  — find non-overlapping (start, end, highlight) spans against the
           original paragraph text, then escape and render in one pass.
           A match that overlaps an already-claimed span is dropped.
  legacy — escape the paragraph, then for each highlight (longest first)
           replace every match of its escaped text in the progressively
           rewritten string. Byte-compatible with renderings persisted by
           earlier versions, including their defect: a shorter highlight
           can match text inside markers inserted by a longer one, nesting
           or breaking markup.

RULES:
- Paragraph text is always HTML-escaped before any marker is inserted
- Highlights are sorted by descending text length; ties keep input order
- Matching is case-insensitive and not word-bounded; the matched text
  keeps its original case
- A highlight that matches nothing is skipped, never an error
- Marker: <mark class="transcript-highlight" data-highlight-id="ID"
  style="background-color: HEX">TEXT</mark>
- None paragraph or highlight lists raise InvalidArgumentError
"""

from __future__ import annotations

import logging
import re
from typing import List, NamedTuple, Sequence

from insight_transcripts.config import ANNOTATION_MODE, ANNOTATION_MODES, resolve_highlight_color
from insight_transcripts.core.cleaner import escape_attribute, escape_html
from insight_transcripts.core.ir import (
    AnnotatedParagraph,
    Highlight,
    Paragraph,
    require_list,
)

logger = logging.getLogger(__name__)

MARKER_CLASS = "transcript-highlight"


class HighlightSpan(NamedTuple):
    """A claimed region [start, end) of the unescaped paragraph text."""

    start: int
    end: int
    highlight: Highlight


def render_marker(highlight: Highlight, inner_html: str) -> str:
    """Wrap already-escaped HTML in the marker element for a highlight."""
    return (
        '<mark class="{cls}" data-highlight-id="{id}" '
        'style="background-color: {color}">{inner}</mark>'
    ).format(
        cls=MARKER_CLASS,
        id=escape_attribute(highlight.id),
        color=resolve_highlight_color(highlight.color),
        inner=inner_html,
    )


def _longest_first(highlights: Sequence[Highlight]) -> List[Highlight]:
    # sorted() is stable: equal lengths keep their stored order
    return sorted(highlights, key=lambda h: len(h.text), reverse=True)


def find_highlight_spans(text: str, highlights: Sequence[Highlight]) -> List[HighlightSpan]:
    """Compute non-overlapping highlight spans over unescaped text.

    Longer highlights claim text first. Every case-insensitive occurrence
    is considered; occurrences overlapping a claimed span are dropped.

    Returns:
        Spans ordered by start offset.
    """
    require_list(highlights, "highlights")

    claimed: List[HighlightSpan] = []
    for highlight in _longest_first(highlights):
        pattern = re.compile(re.escape(highlight.text), re.IGNORECASE)
        matched = False
        for match in pattern.finditer(text):
            start, end = match.span()
            if any(start < span.end and span.start < end for span in claimed):
                continue
            claimed.append(HighlightSpan(start, end, highlight))
            matched = True
        if not matched:
            logger.debug("Highlight %s not found in paragraph", highlight.id)

    claimed.sort(key=lambda span: span.start)
    return claimed


def _annotate_spans(text: str, highlights: Sequence[Highlight]) -> str:
    parts: List[str] = []
    cursor = 0
    for span in find_highlight_spans(text, highlights):
        parts.append(escape_html(text[cursor:span.start]))
        parts.append(render_marker(span.highlight, escape_html(text[span.start:span.end])))
        cursor = span.end
    parts.append(escape_html(text[cursor:]))
    return "".join(parts)


def _annotate_legacy(text: str, highlights: Sequence[Highlight]) -> str:
    result = escape_html(text)
    for highlight in _longest_first(highlights):
        pattern = re.compile(re.escape(escape_html(highlight.text)), re.IGNORECASE)
        result, count = pattern.subn(
            lambda match, h=highlight: render_marker(h, match.group(0)),
            result,
        )
        if not count:
            logger.debug("Highlight %s not found in paragraph", highlight.id)
    return result


def annotate_text(
    text: str,
    highlights: Sequence[Highlight],
    mode: str = ANNOTATION_MODE,
) -> str:
    """Escape paragraph text and wrap every highlight match in a marker.

    Args:
        text: One paragraph's cleaned plain text.
        highlights: All highlights of the owning source item.
        mode: "spans" (default) or "legacy".

    Returns:
        HTML-safe annotated text.

    Raises:
        InvalidArgumentError: highlights is None.
        ValueError: mode is not a known annotation mode.
    """
    require_list(highlights, "highlights")
    if mode == "spans":
        return _annotate_spans(text, highlights)
    if mode == "legacy":
        return _annotate_legacy(text, highlights)
    raise ValueError(
        "Unknown annotation mode '{}'. Available: {}".format(
            mode, ", ".join(ANNOTATION_MODES)
        )
    )


def annotate_paragraphs(
    paragraphs: Sequence[Paragraph],
    highlights: Sequence[Highlight],
    mode: str = ANNOTATION_MODE,
) -> List[AnnotatedParagraph]:
    """Annotate every paragraph of a transcript with the same highlight set.

    Returns an empty list for an empty paragraph list.
    """
    require_list(paragraphs, "paragraphs")
    require_list(highlights, "highlights")
    return [
        AnnotatedParagraph(
            html=annotate_text(paragraph.text, highlights, mode=mode),
            start_s=paragraph.start_s,
        )
        for paragraph in paragraphs
    ]
