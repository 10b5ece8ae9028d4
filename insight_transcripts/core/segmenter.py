"""Caption fragment segmentation into readable paragraphs.

WHY: Providers emit captions in 1–5 second fragments. Reading them one
per line is unbearable, and one giant block loses the seek points. This
module groups fragments into paragraphs at natural breaks while keeping
one representative start time per paragraph.

HOW: A single pass over the fragments with a local accumulator (text and
start time). Before each fragment's text is appended, the accumulator is
checked against three break rules; if any fires, the accumulated paragraph
is flushed and a fresh one starts at the current fragment.

RULES:
- Empty fragments (after cleaning) are skipped entirely
- Gap = this fragment's start minus the previous fragment's end, where the
  previous fragment is the raw predecessor (0 for the first fragment)
- Break when the paragraph has >= 500 chars, OR the gap exceeds 2.0s and
  the paragraph has >= 100 chars, OR it ends a sentence and has >= 100 chars
- Breaks are only checked between fragments; a single oversized fragment
  is never split (paragraph boundaries are persisted by users)
- No paragraph is ever empty
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from insight_transcripts.config import (
    MAX_PARAGRAPH_CHARS,
    MIN_PARAGRAPH_CHARS,
    PAUSE_THRESHOLD_S,
)
from insight_transcripts.core.cleaner import clean_text, ends_with_sentence
from insight_transcripts.core.ir import (
    CaptionFragment,
    Paragraph,
    Transcript,
    require_list,
)

logger = logging.getLogger(__name__)


def _should_break(
    text: str,
    gap_s: float,
    min_chars: int,
    max_chars: int,
    pause_threshold_s: float,
) -> bool:
    """Decide whether the accumulated text ends a paragraph."""
    length = len(text)
    return (
        length >= max_chars
        or (gap_s > pause_threshold_s and length >= min_chars)
        or (ends_with_sentence(text) and length >= min_chars)
    )


def segment_fragments(
    fragments: Sequence[CaptionFragment],
    min_chars: int = MIN_PARAGRAPH_CHARS,
    max_chars: int = MAX_PARAGRAPH_CHARS,
    pause_threshold_s: float = PAUSE_THRESHOLD_S,
) -> List[Paragraph]:
    """Group caption fragments into paragraphs.

    Args:
        fragments: Provider fragments ordered by start time.
        min_chars: Length a paragraph needs before a pause or sentence end
            may close it.
        max_chars: Length at which a paragraph always closes.
        pause_threshold_s: Silence (seconds) that counts as a pause.

    Returns:
        Paragraphs in playback order.

    Raises:
        InvalidArgumentError: fragments is None.
    """
    require_list(fragments, "fragments")

    paragraphs: List[Paragraph] = []
    current_text = ""
    current_start_s = 0.0

    for index, fragment in enumerate(fragments):
        text = clean_text(fragment.text)
        if not text:
            continue

        if index > 0:
            previous = fragments[index - 1]
            gap_s = fragment.start_s - (previous.start_s + previous.duration_s)
        else:
            gap_s = 0.0

        if current_text and _should_break(
            current_text, gap_s, min_chars, max_chars, pause_threshold_s
        ):
            paragraphs.append(Paragraph(text=current_text, start_s=current_start_s))
            current_text = ""
            current_start_s = fragment.start_s

        if not current_text:
            current_start_s = fragment.start_s
            current_text = text
        else:
            current_text = current_text + " " + text

    if current_text:
        paragraphs.append(Paragraph(text=current_text, start_s=current_start_s))

    logger.debug(
        "Segmented %d fragments into %d paragraphs", len(fragments), len(paragraphs)
    )
    return paragraphs


def build_transcript(
    fragments: Sequence[CaptionFragment],
    source_id: str,
    language: str = "",
) -> Transcript:
    """Build a Transcript IR from provider fragments.

    RULES:
    - paragraphs come from segment_fragments with default thresholds
    - duration_s is the latest fragment end, 0.0 for an empty transcript
    - highlights start empty; callers attach the source item's set
    """
    require_list(fragments, "fragments")
    fragment_list = list(fragments)
    duration_s = max((f.end_s for f in fragment_list), default=0.0)

    return Transcript(
        source_id=source_id,
        language=language,
        fragments=fragment_list,
        paragraphs=segment_fragments(fragment_list),
        duration_s=duration_s,
    )
