"""Insight Transcripts — caption segmentation and highlight annotation.

WHY: Caption providers return hundreds of short timed fragments per video.
Nobody can read that. The vault needs readable paragraphs that still seek
back to playback time, with the user's highlights painted over them.

HOW: Three-stage pipeline: fetch (API client), segment and annotate (core),
render (pluggable formatters). Each stage is independently testable.

RULES:
- All formatters consume the same Transcript IR
- The core never performs I/O; only the API client talks to the network
- Paragraph text is escaped before highlight markers are inserted
"""

__version__ = "0.1.0"
