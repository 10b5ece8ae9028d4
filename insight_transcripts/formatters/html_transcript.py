"""Annotated HTML transcript formatter with seek markers.

WHY: The insight view shows the transcript as readable paragraphs, each
led by a clickable timestamp that seeks the player, with the user's
highlights painted in. This formatter produces exactly that fragment so
the view only has to insert it and wire click handlers.

HOW: Annotates every paragraph with the transcript's highlights, then
wraps each in a ``transcript-paragraph`` block with a timestamp label.
The seek request is emitted as ``data-seek`` (seconds); the player is
controlled by the embedding page.

RULES:
- One <div class="transcript-paragraph" data-time="S"> per paragraph
- Timestamp label: <span class="transcript-timestamp" data-seek="S">M:SS</span>
- Paragraph body: <p> with annotated (escaped) text
- Blocks joined by newlines; an empty transcript produces an empty string
- Output suffix: "-transcript.html"; media type: "text/html"
"""

from __future__ import annotations

from typing import List

from insight_transcripts.core.annotator import annotate_paragraphs
from insight_transcripts.core.ir import AnnotatedParagraph, Transcript
from insight_transcripts.core.timestamps import format_timestamp
from insight_transcripts.formatters.base import BaseFormatter, FormatterOutput


def _seconds_attr(seconds: float) -> str:
    # Whole seconds render without ".0", as stored seek values always have
    if float(seconds).is_integer():
        return str(int(seconds))
    return repr(float(seconds))


def render_paragraph_block(paragraph: AnnotatedParagraph) -> str:
    """Render one annotated paragraph as a seekable block."""
    start = _seconds_attr(paragraph.start_s)
    return (
        '<div class="transcript-paragraph" data-time="{start}">'
        '<span class="transcript-timestamp" data-seek="{start}">{label}</span>'
        "<p>{html}</p>"
        "</div>"
    ).format(start=start, label=format_timestamp(paragraph.start_s), html=paragraph.html)


class HTMLTranscriptFormatter(BaseFormatter):
    """Formatter that produces annotated, seekable HTML paragraphs."""

    suffix = "-transcript.html"
    media_type = "text/html"

    @property
    def name(self) -> str:
        return "Annotated HTML"

    def format(self, transcript: Transcript) -> List[FormatterOutput]:
        annotated = annotate_paragraphs(
            transcript.paragraphs,
            transcript.highlights,
            mode=self.annotation_mode,
        )
        content = "\n".join(render_paragraph_block(p) for p in annotated)
        return [FormatterOutput(suffix=self.suffix, content=content, media_type=self.media_type)]
