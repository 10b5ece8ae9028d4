"""Shared test fixtures for the insight_transcripts test suite.

WHY: Segmenter, annotator, formatter, CLI, and API tests all need the
same realistic caption sample and highlight set. Centralizing them here
keeps the expected paragraph boundaries in one place.

HOW: SAMPLE_FRAGMENTS mimics a provider response (already converted to
seconds): entity-encoded text, a [Music] tag, a long pause, and sentence
ends. The expected segmentation is documented next to the data.

RULES:
- Fixtures return fresh lists so tests may mutate them freely
- Highlight ids are deterministic for assertion readability
"""

from typing import Any, Dict, List

import pytest

from insight_transcripts.core.ir import CaptionFragment, Highlight


# ---------------------------------------------------------------------------
# Sample provider captions (seconds)
# ---------------------------------------------------------------------------
#
# Expected segmentation with default thresholds:
#   paragraph 0 (start 0.0):  fragments 0–4 (fragment 1 is [Music], skipped);
#                             closes because it ends with "." and is >= 100 chars
#   paragraph 1 (start 14.0): fragments 5–6; closes on the 3.5s pause
#   paragraph 2 (start 24.0): fragment 7

SAMPLE_FRAGMENT_DICTS: List[Dict[str, Any]] = [
    {"text": "Welcome back to the channel,",                 "start": 0.0,  "duration": 2.0},
    {"text": "[Music]",                                      "start": 2.0,  "duration": 1.5},
    {"text": "today we&#39;re talking about",                "start": 3.5,  "duration": 2.0},
    {"text": "how memory works &amp; why we forget",         "start": 5.5,  "duration": 3.0},
    {"text": "most of what we read within a week of reading it.", "start": 8.5, "duration": 5.0},
    {"text": "The first idea is spaced repetition,",         "start": 14.0, "duration": 2.5},
    {"text": "reviewing a card right before you would forget it and doing that for months",
                                                             "start": 16.5, "duration": 4.0},
    {"text": "So   let&#39;s look at the research.",         "start": 24.0, "duration": 3.0},
]

EXPECTED_PARAGRAPHS = [
    (
        "Welcome back to the channel, today we're talking about how memory works "
        "& why we forget most of what we read within a week of reading it.",
        0.0,
    ),
    (
        "The first idea is spaced repetition, reviewing a card right before you "
        "would forget it and doing that for months",
        14.0,
    ),
    ("So let's look at the research.", 24.0),
]


@pytest.fixture
def sample_fragment_dicts():
    """Provider captions in stored JSON form."""
    return [dict(d) for d in SAMPLE_FRAGMENT_DICTS]


@pytest.fixture
def sample_fragments():
    """Provider captions as CaptionFragment objects."""
    return [CaptionFragment.from_dict(d) for d in SAMPLE_FRAGMENT_DICTS]


@pytest.fixture
def sample_highlights():
    """Highlights over the sample transcript; "spaced" is contained in "spaced repetition"."""
    return [
        Highlight(id="h-memory", text="how memory works", color="green"),
        Highlight(id="h-spaced", text="spaced", color="pink"),
        Highlight(id="h-spaced-rep", text="Spaced Repetition", color="blue", note="core idea"),
        Highlight(id="h-missing", text="not in this video"),
    ]


@pytest.fixture
def expected_paragraphs():
    """(text, start) pairs the sample captions segment into."""
    return list(EXPECTED_PARAGRAPHS)


@pytest.fixture
def sample_transcript(sample_fragments, sample_highlights):
    """The sample captions segmented, with the sample highlights attached."""
    from insight_transcripts.core.segmenter import build_transcript

    transcript = build_transcript(sample_fragments, source_id="dQw4w9WgXcQ", language="en")
    transcript.highlights = sample_highlights
    return transcript
