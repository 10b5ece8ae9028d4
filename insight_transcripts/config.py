"""Configuration constants, highlight palette, languages, and .env loading.

WHY: Centralizes all tunable values so they are easy to find and override.
Segmentation thresholds, the highlight palette, and provider defaults are
plain data structures, not buried in logic, so changes to paragraph
boundaries or colors are made in exactly one place.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level dicts and numbers. load_api_key() provides a clear error
when the caption provider key is missing.

RULES:
- Segmentation thresholds change persisted paragraph boundaries; treat
  them as a compatibility contract
- Unknown highlight colors fall back to yellow
- API key is loaded from .env via python-dotenv, never hardcoded
- Provider defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Paragraph segmentation thresholds
# ---------------------------------------------------------------------------

PAUSE_THRESHOLD_S = 2.0
"""Silence between fragments (seconds) that may start a new paragraph."""

MIN_PARAGRAPH_CHARS = 100
"""A paragraph must reach this length before a pause or sentence end splits it."""

MAX_PARAGRAPH_CHARS = 500
"""A paragraph at or past this length always splits before the next fragment."""

# ---------------------------------------------------------------------------
# Highlight palette
# ---------------------------------------------------------------------------

HIGHLIGHT_PALETTE: dict[str, str] = {
    "yellow": "#fef08a",
    "green": "#bbf7d0",
    "blue": "#bfdbfe",
    "pink": "#fbcfe8",
}

DEFAULT_HIGHLIGHT_COLOR = "yellow"


def resolve_highlight_color(color: str | None) -> str:
    """Map a highlight color name to its background hex value.

    RULES:
    - Known names map through HIGHLIGHT_PALETTE
    - Unknown or empty names return the yellow background
    """
    return HIGHLIGHT_PALETTE.get(color or "", HIGHLIGHT_PALETTE[DEFAULT_HIGHLIGHT_COLOR])


# ---------------------------------------------------------------------------
# Annotation rendering
# ---------------------------------------------------------------------------

ANNOTATION_MODES = ("spans", "legacy")
"""spans: non-overlapping spans rendered once. legacy: sequential replace."""

ANNOTATION_MODE = os.getenv("ANNOTATION_MODE", "spans").strip().lower()
if ANNOTATION_MODE not in ANNOTATION_MODES:
    ANNOTATION_MODE = "spans"

# ---------------------------------------------------------------------------
# Transcript languages offered to users
# ---------------------------------------------------------------------------

TRANSCRIPT_LANGUAGES: dict[str, str] = {
    "auto": "Auto (Original)",
    "es": "Spanish",
    "en": "English",
    "pt": "Portuguese",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
}

DEFAULT_TRANSCRIPT_LANGUAGE = os.getenv("DEFAULT_TRANSCRIPT_LANGUAGE", "auto").strip().lower()
if DEFAULT_TRANSCRIPT_LANGUAGE not in TRANSCRIPT_LANGUAGES:
    DEFAULT_TRANSCRIPT_LANGUAGE = "auto"

# ---------------------------------------------------------------------------
# Caption provider (Supadata) configuration
# ---------------------------------------------------------------------------

SUPADATA_BASE_URL = os.getenv("SUPADATA_BASE_URL", "https://api.supadata.ai/v1")
SUPADATA_TIMEOUT_S = float(os.getenv("SUPADATA_TIMEOUT_S", "30"))


def load_api_key() -> str:
    """Load the Supadata API key from the environment.

    WHY: Every transcript fetch needs the key. Loading it from the
    environment (via .env) keeps it out of source code.

    RULES:
    - Raises ValueError if the key is missing or empty
    - Never returns a default/placeholder value
    """
    key = os.getenv("SUPADATA_API_KEY", "").strip()
    if not key:
        raise ValueError(
            "Transcript API not configured. "
            "Add SUPADATA_API_KEY to the .env file in the app folder."
        )
    return key
