"""Output formatter registry — pluggable render targets.

WHY: The CLI and HTTP API need a single lookup to find the right
formatter by name. A central dict makes adding a format one import and
one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["html"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API requests)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from insight_transcripts.formatters.html_transcript import HTMLTranscriptFormatter
from insight_transcripts.formatters.paragraphs_json import ParagraphsJSONFormatter
from insight_transcripts.formatters.plain_text import PlainTextFormatter

if TYPE_CHECKING:
    from insight_transcripts.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "html": HTMLTranscriptFormatter,
    "plain_text": PlainTextFormatter,
    "paragraphs_json": ParagraphsJSONFormatter,
}
