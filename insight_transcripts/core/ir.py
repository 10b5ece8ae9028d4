"""Intermediate representation dataclasses for transcripts and highlights.

WHY: Caption providers return a flat list of short timed fragments with no
structure. The renderer needs readable paragraphs, each with one seek
time, plus the user's highlights. The IR is the single, well-typed form
that the segmenter produces and every formatter consumes.

HOW: Five dataclasses:
  CaptionFragment    — one timed unit of caption text from the provider
  Paragraph          — merged, readable span of fragments with a start time
  Highlight          — user-selected substring with color and optional note
  AnnotatedParagraph — paragraph HTML with highlight markers applied
  Transcript         — fragments, paragraphs, and highlights of one source

RULES:
- All times are float seconds
- Fragments and paragraphs are never mutated after creation
- Highlight.text is never empty
- Highlight color is kept as given; unknown colors render as yellow
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from insight_transcripts.config import DEFAULT_HIGHLIGHT_COLOR


class InvalidArgumentError(ValueError):
    """Raised when a core operation receives a missing (None) input list.

    WHY: A None fragment or highlight list is an upstream bug. Treating it
    as empty would silently render a blank transcript.
    """


def require_list(value: Any, name: str) -> None:
    """Reject a None input list with InvalidArgumentError."""
    if value is None:
        raise InvalidArgumentError("{} must be a list, got None".format(name))


@dataclass(frozen=True)
class CaptionFragment:
    """One timed caption fragment from the transcription provider.

    RULES:
    - text: raw caption text (may contain entities and [Music] tags)
    - start_s / duration_s: float seconds, >= 0
    - Fragments arrive ordered by start_s; neighbours may overlap slightly
    """

    text: str
    start_s: float
    duration_s: float

    @property
    def end_s(self) -> float:
        return self.start_s + self.duration_s

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CaptionFragment:
        """Parse a fragment from ``{"text", "start", "duration"}`` in seconds."""
        return cls(
            text=data.get("text") or "",
            start_s=float(data["start"]),
            duration_s=float(data.get("duration", 0.0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "start": self.start_s, "duration": self.duration_s}


@dataclass(frozen=True)
class Paragraph:
    """A merged, human-readable span of caption text.

    RULES:
    - text: cleaned fragment texts joined by single spaces, never empty
    - start_s: start of the first fragment that contributed text
    """

    text: str
    start_s: float

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "start": self.start_s}


@dataclass
class Highlight:
    """A user-selected substring of transcript text.

    WHY: Highlights belong to the whole source item, not to a paragraph.
    The annotator looks for each highlight in every paragraph.

    RULES:
    - id: caller-assigned, unique per source item
    - text: the substring as originally selected, never empty
    - color: "yellow", "green", "blue" or "pink"
    - note / timestamp_s: optional user annotations
    """

    id: str
    text: str
    color: str = DEFAULT_HIGHLIGHT_COLOR
    note: Optional[str] = None
    timestamp_s: Optional[float] = None
    created_at: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.text:
            raise InvalidArgumentError(
                "Highlight {!r} has empty text".format(self.id)
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Highlight:
        """Parse a highlight from its stored form.

        RULES:
        - color defaults to yellow when missing or empty
        - timestamp is seconds, or None
        """
        timestamp = data.get("timestamp")
        return cls(
            id=str(data["id"]),
            text=data.get("text") or "",
            color=data.get("color") or DEFAULT_HIGHLIGHT_COLOR,
            note=data.get("note"),
            timestamp_s=float(timestamp) if timestamp is not None else None,
            created_at=data.get("createdAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "text": self.text,
            "color": self.color,
            "note": self.note,
            "timestamp": self.timestamp_s,
        }  # type: Dict[str, Any]
        if self.created_at is not None:
            data["createdAt"] = self.created_at
        return data


@dataclass(frozen=True)
class AnnotatedParagraph:
    """Paragraph HTML (escaped text with highlight markers) and its start time."""

    html: str
    start_s: float


@dataclass
class Transcript:
    """Everything a formatter needs to render one source item.

    HOW: Built by segmenter.build_transcript from the provider fragments.
    Highlights are attached by the caller, since the application owns them.

    RULES:
    - paragraphs: ordered, start times non-decreasing
    - duration_s: end of the last fragment, 0.0 when empty
    """

    source_id: str
    language: str
    fragments: List[CaptionFragment]
    paragraphs: List[Paragraph]
    highlights: List[Highlight] = field(default_factory=list)
    duration_s: float = 0.0
