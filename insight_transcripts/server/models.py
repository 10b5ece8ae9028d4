"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. Pydantic
rejects a missing fragment or highlight list with a 422 before any core
code runs.

HOW: Each endpoint pair (request + response) has its own model. Payload
models mirror the stored JSON shapes ({text, start, duration} fragments,
{id, text, color, note, timestamp} highlights) and convert to the core IR
via to_ir().

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Times are float seconds, >= 0
- Enum values match internal constants exactly (format keys, modes)
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from insight_transcripts.config import ANNOTATION_MODE
from insight_transcripts.core.ir import CaptionFragment, Highlight, Paragraph


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class OutputFormat(str, Enum):
    """Available output format identifiers.

    RULES:
    - Values match keys in insight_transcripts.formatters.FORMATTERS exactly
    """

    html = "html"
    plain_text = "plain_text"
    paragraphs_json = "paragraphs_json"


class AnnotationMode(str, Enum):
    """Highlight rendering modes (see core.annotator)."""

    spans = "spans"
    legacy = "legacy"


# ---------------------------------------------------------------------------
# Payload models
# ---------------------------------------------------------------------------


class FragmentPayload(BaseModel):
    """One timed caption fragment."""

    text: str = Field(description="Raw caption text.")
    start: float = Field(ge=0, description="Start offset in seconds.")
    duration: float = Field(default=0.0, ge=0, description="Duration in seconds.")

    def to_ir(self) -> CaptionFragment:
        return CaptionFragment(text=self.text, start_s=self.start, duration_s=self.duration)


class ParagraphPayload(BaseModel):
    """One segmented paragraph."""

    text: str = Field(description="Cleaned paragraph text.")
    start: float = Field(ge=0, description="Start of the paragraph in seconds.")

    def to_ir(self) -> Paragraph:
        return Paragraph(text=self.text, start_s=self.start)


class HighlightPayload(BaseModel):
    """A user highlight as stored on the insight record."""

    id: str = Field(description="Highlight id, unique per source item.")
    text: str = Field(min_length=1, description="Highlighted text as originally selected.")
    color: str = Field(
        default="yellow",
        description="Marker color: yellow, green, blue or pink. Unknown names render yellow.",
    )
    note: Optional[str] = Field(default=None, description="Optional user note.")
    timestamp: Optional[float] = Field(
        default=None, ge=0, description="Optional playback time of the highlight in seconds.",
    )

    def to_ir(self) -> Highlight:
        return Highlight(
            id=self.id,
            text=self.text,
            color=self.color or "yellow",
            note=self.note,
            timestamp_s=self.timestamp,
        )


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class SegmentRequest(BaseModel):
    """Caption fragments to segment into paragraphs."""

    fragments: List[FragmentPayload] = Field(description="Fragments ordered by start time.")


class AnnotateRequest(BaseModel):
    """Paragraphs and the source item's highlights to overlay on them."""

    paragraphs: List[ParagraphPayload] = Field(description="Paragraphs to annotate.")
    highlights: List[HighlightPayload] = Field(description="All highlights of the source item.")
    mode: AnnotationMode = Field(default=AnnotationMode(ANNOTATION_MODE), description="Rendering mode.")


class RenderRequest(BaseModel):
    """Fragments and highlights to render through one formatter."""

    source_id: str = Field(default="transcript", description="Source identifier for the output.")
    language: str = Field(default="", description="Transcript language code.")
    fragments: List[FragmentPayload] = Field(description="Fragments ordered by start time.")
    highlights: List[HighlightPayload] = Field(
        default_factory=list, description="All highlights of the source item.",
    )
    format: OutputFormat = Field(default=OutputFormat.html, description="Output format.")
    mode: AnnotationMode = Field(default=AnnotationMode(ANNOTATION_MODE), description="Rendering mode.")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class ParagraphResponse(BaseModel):
    text: str = Field(description="Cleaned paragraph text.")
    start: float = Field(description="Start of the paragraph in seconds.")
    timestamp: str = Field(description="Seek label, M:SS or H:MM:SS.")


class SegmentResponse(BaseModel):
    paragraphs: List[ParagraphResponse] = Field(description="Paragraphs in playback order.")


class AnnotatedParagraphResponse(BaseModel):
    html: str = Field(description="Escaped paragraph text with highlight markers.")
    start: float = Field(description="Start of the paragraph in seconds.")


class AnnotateResponse(BaseModel):
    paragraphs: List[AnnotatedParagraphResponse] = Field(description="Annotated paragraphs.")


class TranscriptResponseModel(BaseModel):
    """A fetched and segmented provider transcript."""

    video_id: str = Field(description="YouTube video id.")
    language: str = Field(description="Requested transcript language.")
    duration: float = Field(description="End of the last caption in seconds.")
    raw: str = Field(description="Paragraph texts joined by blank lines.")
    paragraphs: List[ParagraphResponse] = Field(description="Paragraphs in playback order.")
    fragments: List[FragmentPayload] = Field(description="Provider fragments, times in seconds.")


class FormatInfo(BaseModel):
    key: str = Field(description="Format identifier used in API requests.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '-transcript.html').")
    media_type: str = Field(description="MIME type of the produced content.")


class LanguageInfo(BaseModel):
    code: str = Field(description="Language code ('auto' for the original track).")
    label: str = Field(description="English language name.")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
