"""Plain text transcript formatter.

WHY: Users copy transcripts into notes and search them. The plain form
is the paragraph text with nothing else, without timestamps or markup.
It is also what the application stores as the insight's raw transcript.

RULES:
- One paragraph per block, separated by a blank line
- Trailing newline only when there is content
- Highlights are ignored
- Output suffix: "-transcript.txt"; media type: "text/plain"
"""

from __future__ import annotations

from typing import List

from insight_transcripts.core.ir import Transcript
from insight_transcripts.formatters.base import BaseFormatter, FormatterOutput


def paragraphs_to_text(transcript: Transcript) -> str:
    """Join paragraph texts with blank lines."""
    return "\n\n".join(paragraph.text for paragraph in transcript.paragraphs)


class PlainTextFormatter(BaseFormatter):
    """Formatter that produces the raw paragraph text."""

    suffix = "-transcript.txt"
    media_type = "text/plain"

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, transcript: Transcript) -> List[FormatterOutput]:
        content = paragraphs_to_text(transcript)
        if content:
            content += "\n"
        return [FormatterOutput(suffix=self.suffix, content=content, media_type=self.media_type)]
