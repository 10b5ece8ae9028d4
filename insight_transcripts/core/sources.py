"""Source URL recognition: YouTube video ids and source types.

WHY: Users paste whatever link they have: watch pages, short links,
embeds, Shorts. Transcript fetching needs the bare video id, and the
insight record needs a coarse source type for filtering.

RULES:
- Recognized YouTube forms: watch?v=, youtu.be/, embed/, shorts/
- A bare 11-character id is returned unchanged
- detect_source_type defaults to "article" for unrecognized URLs and
  "other" for an empty one
"""

from __future__ import annotations

import re
from typing import Optional

_VIDEO_ID_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)"),
    re.compile(r"youtube\.com/shorts/([^&\n?#]+)"),
)

_BARE_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")

_ARTICLE_PATH_RE = re.compile(r"\.(com|org|net|io)/.*article", re.IGNORECASE)


def extract_video_id(url: str) -> Optional[str]:
    """Extract a YouTube video id from a URL, or None if there is none."""
    if not url:
        return None
    url = url.strip()

    for pattern in _VIDEO_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)

    if _BARE_VIDEO_ID_RE.match(url):
        return url
    return None


def detect_source_type(url: str) -> str:
    """Classify a source URL as youtube, podcast, article, book, or other."""
    if not url:
        return "other"

    lower_url = url.lower()

    if "youtube.com" in lower_url or "youtu.be" in lower_url:
        return "youtube"
    if "spotify.com" in lower_url or "podcast" in lower_url:
        return "podcast"
    if (
        "medium.com" in lower_url
        or "substack.com" in lower_url
        or _ARTICLE_PATH_RE.search(lower_url)
    ):
        return "article"
    if "amazon.com/" in lower_url and "/dp/" in lower_url:
        return "book"

    return "article"
