"""Caption provider client package — async HTTP interface to Supadata.

WHY: Video insights need the provider's timed captions before anything
can be segmented. This package keeps all provider communication behind
one async client class.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. Response data is
parsed into typed dataclasses defined in models.py and converted to
core CaptionFragment objects.

RULES:
- All provider requests go through SupadataClient
- Authentication is via the x-api-key header from config
- Fetch failures surface as typed exceptions; the core never sees them
"""

from insight_transcripts.api.client import (
    SupadataAPIError,
    SupadataClient,
    TranscriptNotAvailableError,
)
from insight_transcripts.api.models import SupadataSegment, TranscriptResponse

__all__ = [
    "SupadataAPIError",
    "SupadataClient",
    "SupadataSegment",
    "TranscriptNotAvailableError",
    "TranscriptResponse",
]
