"""Supadata transcript API response dataclasses.

WHY: The transcript endpoint returns caption entries in milliseconds with
provider-specific field names. Typed dataclasses make the response shape
explicit and keep the millisecond → second conversion in one place.

HOW: Each dataclass maps 1:1 to a JSON object of the response. Factory
methods (from_dict) parse raw API dicts; to_fragment converts an entry
to the core CaptionFragment.

RULES:
- offset/duration are integer or float milliseconds in the response
- CaptionFragment times are float seconds (ms / 1000.0)
- A missing duration is treated as 0
- content may be absent or empty when no transcript exists
"""

from __future__ import annotations

from dataclasses import dataclass, field

from insight_transcripts.core.ir import CaptionFragment


@dataclass
class SupadataSegment:
    """One caption entry of a Supadata transcript response.

    RULES:
    - text: raw caption text (entities and [Music] tags still present)
    - offset_ms: start of the caption in milliseconds
    - duration_ms: length of the caption in milliseconds
    - lang: language code of this entry, when the provider reports it
    """

    text: str
    offset_ms: float
    duration_ms: float
    lang: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> SupadataSegment:
        return cls(
            text=data.get("text") or "",
            offset_ms=data.get("offset") or 0,
            duration_ms=data.get("duration") or 0,
            lang=data.get("lang"),
        )

    def to_fragment(self) -> CaptionFragment:
        return CaptionFragment(
            text=self.text,
            start_s=self.offset_ms / 1000.0,
            duration_s=self.duration_ms / 1000.0,
        )


@dataclass
class TranscriptResponse:
    """Full response of GET /v1/transcript.

    RULES:
    - content: caption entries in playback order, possibly empty
    - lang: transcript language reported by the provider, if any
    - available_langs: other languages the provider could return
    """

    content: list[SupadataSegment]
    lang: str | None = None
    available_langs: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> TranscriptResponse:
        content = data.get("content") or []
        # Plain-text mode returns a string; only segment lists are usable
        if isinstance(content, str):
            content = []
        return cls(
            content=[SupadataSegment.from_dict(item) for item in content],
            lang=data.get("lang"),
            available_langs=list(data.get("availableLangs") or []),
        )

    def to_fragments(self) -> list[CaptionFragment]:
        return [segment.to_fragment() for segment in self.content]
