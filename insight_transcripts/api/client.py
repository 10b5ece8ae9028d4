"""Async HTTP client for the Supadata YouTube transcript API.

WHY: Insights captured from videos start from the provider's timed
captions. This module encapsulates the HTTP exchange behind one client
class so the CLI, HTTP API, and tests never deal with URLs, headers, or
millisecond offsets.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. SupadataClient is an
async context manager: enter it to get an authenticated client, exit to
close the connection pool. fetch_transcript() issues one GET and returns
CaptionFragment objects ready for the segmenter.

RULES:
- Always use the async context manager (async with SupadataClient() as client:)
- Authentication is the x-api-key header, loaded from .env by default
- language "auto" (or None) omits the lang parameter: the original track
- Non-2xx responses raise SupadataAPIError with the provider's message
- A 2xx body that is not a JSON object raises SupadataAPIError
- A 2xx body without caption content (empty, or a pending jobId)
  raises TranscriptNotAvailableError
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx

from insight_transcripts.api.models import TranscriptResponse
from insight_transcripts.config import (
    SUPADATA_BASE_URL,
    SUPADATA_TIMEOUT_S,
    load_api_key,
)
from insight_transcripts.core.ir import CaptionFragment

logger = logging.getLogger(__name__)


class SupadataAPIError(Exception):
    """Raised when the Supadata API returns an error response.

    WHY: Callers need a typed exception to tell provider errors (bad key,
    rate limit, unknown video) apart from network errors.

    RULES:
    - Always include status_code and message
    - message is the response's JSON "message" field, or the body text
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Transcript API error {status_code}: {message}")


class TranscriptNotAvailableError(Exception):
    """Raised when the provider has no transcript for the video and language.

    WHY: "No transcript available" is an expected user-facing condition,
    not a failure of the service. Callers render it differently.
    """

    def __init__(self, video_id: str, language: str | None = None) -> None:
        self.video_id = video_id
        self.language = language
        if language and language != "auto":
            message = f"No transcript available for video {video_id} in language '{language}'"
        else:
            message = f"No transcript available for video {video_id}"
        super().__init__(message)


def _error_message(resp: httpx.Response) -> str:
    """Extract the provider's error message from a failed response."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return resp.text


class SupadataClient:
    """Async client for the Supadata transcript endpoint.

    RULES:
    - Use as: async with SupadataClient() as client: ...
    - api_key defaults to load_api_key() from .env
    - base_url defaults to SUPADATA_BASE_URL from config
    - transport is for tests (httpx.MockTransport); None uses the network
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or load_api_key()
        self._base_url = (base_url or SUPADATA_BASE_URL).rstrip("/")
        self._timeout_s = timeout_s or SUPADATA_TIMEOUT_S
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> SupadataClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"x-api-key": self._api_key},
            timeout=httpx.Timeout(self._timeout_s, connect=10.0),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "SupadataClient must be used as an async context manager: "
                "async with SupadataClient() as client: ..."
            )
        return self._client

    async def fetch_transcript(
        self,
        video_id: str,
        language: str | None = "auto",
        on_status: Callable[[str], None] | None = None,
    ) -> list[CaptionFragment]:
        """Fetch the timed captions of a YouTube video.

        Args:
            video_id: YouTube video id (not a URL).
            language: ISO 639-1 code, or "auto" for the original track.
            on_status: Optional callback for status updates.

        Returns:
            Caption fragments in playback order, times in seconds.

        Raises:
            SupadataAPIError: the provider answered with a non-2xx status
                or a body that is not a JSON object.
            TranscriptNotAvailableError: the transcript is empty.
        """
        client = self._ensure_client()
        if on_status:
            on_status(f"Fetching transcript for {video_id} (language: {language or 'auto'})...")

        params = {"mode": "auto", "url": f"https://youtu.be/{video_id}"}
        if language and language != "auto":
            params["lang"] = language

        logger.debug("GET /transcript video=%s lang=%s", video_id, language)
        resp = await client.get("/transcript", params=params)

        if not resp.is_success:
            raise SupadataAPIError(resp.status_code, _error_message(resp))

        try:
            data = resp.json()
        except ValueError:
            raise SupadataAPIError(resp.status_code, resp.text)
        if not isinstance(data, dict):
            raise SupadataAPIError(resp.status_code, resp.text)

        transcript = TranscriptResponse.from_dict(data)
        if not transcript.content:
            raise TranscriptNotAvailableError(video_id, language)

        fragments = transcript.to_fragments()
        logger.info("Fetched %d caption fragments for %s", len(fragments), video_id)
        if on_status:
            on_status(f"  Received {len(fragments)} caption fragments")
        return fragments
