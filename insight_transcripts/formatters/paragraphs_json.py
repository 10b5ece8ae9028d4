"""Paragraph JSON formatter — the cache record stored with an insight.

WHY: Segmentation is re-run only when the captions change, so the
application caches paragraphs next to the insight. The cache also carries
each paragraph's annotated HTML and the highlight set it was rendered
with, so the view can show it without recomputing.

HOW: Serializes the Transcript IR into one JSON document whose shape is
pinned by paragraphs_schema.json (bundled next to this module).

RULES:
- Top level: source_id, language, duration, paragraphs, highlights
- Each paragraph: index, text, start (seconds), timestamp (M:SS), html
- Highlights are serialized with Highlight.to_dict
- UTF-8, 2-space indent, non-ASCII kept as-is
- Output suffix: "-paragraphs.json"; media type: "application/json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from insight_transcripts.core.annotator import annotate_paragraphs
from insight_transcripts.core.ir import Transcript
from insight_transcripts.core.timestamps import format_timestamp
from insight_transcripts.formatters.base import BaseFormatter, FormatterOutput

SCHEMA_PATH = Path(__file__).resolve().parent / "paragraphs_schema.json"


def transcript_to_dict(transcript: Transcript, annotation_mode: str) -> Dict[str, Any]:
    """Build the JSON-ready dict for a transcript."""
    annotated = annotate_paragraphs(
        transcript.paragraphs,
        transcript.highlights,
        mode=annotation_mode,
    )
    paragraphs = []  # type: List[Dict[str, Any]]
    for index, (paragraph, rendered) in enumerate(zip(transcript.paragraphs, annotated)):
        paragraphs.append({
            "index": index,
            "text": paragraph.text,
            "start": paragraph.start_s,
            "timestamp": format_timestamp(paragraph.start_s),
            "html": rendered.html,
        })

    return {
        "source_id": transcript.source_id,
        "language": transcript.language,
        "duration": transcript.duration_s,
        "paragraphs": paragraphs,
        "highlights": [h.to_dict() for h in transcript.highlights],
    }


class ParagraphsJSONFormatter(BaseFormatter):
    """Formatter that produces the cached paragraph record as JSON."""

    suffix = "-paragraphs.json"
    media_type = "application/json"

    @property
    def name(self) -> str:
        return "Paragraphs JSON"

    def format(self, transcript: Transcript) -> List[FormatterOutput]:
        data = transcript_to_dict(transcript, self.annotation_mode)
        content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        return [FormatterOutput(suffix=self.suffix, content=content, media_type=self.media_type)]
