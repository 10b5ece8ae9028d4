"""Pure operations on a source item's highlight list.

WHY: The application stores highlights as a list inside the insight
record and rewrites the whole list on every change. Keeping the list
edits pure (new list in, new list out) means the storage layer only ever
persists a value this module produced.

HOW: Each function takes the current list and returns a new one. Input
lists and the Highlight objects in them are never mutated.

RULES:
- New highlights get a fresh hex UUID, yellow by default, empty note
- Removing or editing an unknown id returns an unchanged copy
- highlights_from_dicts parses the stored form via Highlight.from_dict
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from insight_transcripts.config import DEFAULT_HIGHLIGHT_COLOR
from insight_transcripts.core.ir import Highlight, require_list


def create_highlight(
    text: str,
    color: Optional[str] = None,
    note: Optional[str] = None,
    timestamp_s: Optional[float] = None,
) -> Highlight:
    """Create a new highlight with a generated id and creation time."""
    return Highlight(
        id=uuid.uuid4().hex,
        text=text,
        color=color or DEFAULT_HIGHLIGHT_COLOR,
        note=note or "",
        timestamp_s=timestamp_s,
        created_at=datetime.now(timezone.utc).isoformat(),
    )


def add_highlight(highlights: List[Highlight], highlight: Highlight) -> List[Highlight]:
    """Return a new list with the highlight appended."""
    require_list(highlights, "highlights")
    return list(highlights) + [highlight]


def remove_highlight(highlights: List[Highlight], highlight_id: str) -> List[Highlight]:
    """Return a new list without the highlight with the given id."""
    require_list(highlights, "highlights")
    return [h for h in highlights if h.id != highlight_id]


def update_highlight_note(
    highlights: List[Highlight],
    highlight_id: str,
    note: str,
) -> List[Highlight]:
    """Return a new list where the matching highlight carries the new note."""
    require_list(highlights, "highlights")
    return [replace(h, note=note) if h.id == highlight_id else h for h in highlights]


def highlights_from_dicts(items: Iterable[Dict[str, Any]]) -> List[Highlight]:
    """Parse stored highlight dicts into Highlight objects."""
    require_list(items, "highlights")
    return [Highlight.from_dict(item) for item in items]
