"""Tests for the FastAPI transcript API.

WHY: The vault front end talks to the engine only through these
endpoints. Each endpoint's happy path, validation errors, and provider
failure mapping are checked so the front end can rely on status codes.

HOW: FastAPI TestClient drives the app in-process. The provider fetch
(server.app._fetch_fragments) is patched with an AsyncMock, or with a
real client on an httpx.MockTransport when the provider body matters.
The Supadata API is never called; a fake key is set in the environment.

RULES:
- All tests use the FastAPI TestClient (synchronous)
- The transcript provider is never called (fetches are mocked)
- Each test is independent; the app holds no state between requests
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from insight_transcripts import __version__
from insight_transcripts.api.client import (
    SupadataAPIError,
    SupadataClient,
    TranscriptNotAvailableError,
)
from insight_transcripts.server.app import app

FETCH_TARGET = "insight_transcripts.server.app._fetch_fragments"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def highlight_dicts():
    return [
        {"id": "h-memory", "text": "how memory works", "color": "green"},
        {"id": "h-spaced-rep", "text": "Spaced Repetition", "color": "blue", "note": "core idea"},
    ]


# ---------------------------------------------------------------------------
# POST /paragraphs
# ---------------------------------------------------------------------------


class TestSegment:

    def test_sample_fragments(self, client, sample_fragment_dicts, expected_paragraphs):
        resp = client.post("/paragraphs", json={"fragments": sample_fragment_dicts})
        assert resp.status_code == 200
        paragraphs = resp.json()["paragraphs"]
        assert [(p["text"], p["start"]) for p in paragraphs] == expected_paragraphs
        assert [p["timestamp"] for p in paragraphs] == ["0:00", "0:14", "0:24"]

    def test_empty_fragment_list(self, client):
        resp = client.post("/paragraphs", json={"fragments": []})
        assert resp.status_code == 200
        assert resp.json() == {"paragraphs": []}

    def test_missing_fragments_is_422(self, client):
        assert client.post("/paragraphs", json={}).status_code == 422

    def test_null_fragments_is_422(self, client):
        assert client.post("/paragraphs", json={"fragments": None}).status_code == 422

    def test_negative_start_is_422(self, client):
        resp = client.post("/paragraphs", json={"fragments": [{"text": "x", "start": -1}]})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# POST /annotations
# ---------------------------------------------------------------------------


class TestAnnotate:

    def test_marker_html(self, client):
        resp = client.post("/annotations", json={
            "paragraphs": [{"text": "Hello world.", "start": 0}],
            "highlights": [{"id": "h1", "text": "world"}],
        })
        assert resp.status_code == 200
        assert resp.json() == {"paragraphs": [{
            "html": 'Hello <mark class="transcript-highlight" data-highlight-id="h1" '
                    'style="background-color: #fef08a">world</mark>.',
            "start": 0.0,
        }]}

    def test_legacy_mode(self, client):
        payload = {
            "paragraphs": [{"text": "category", "start": 3}],
            "highlights": [{"id": "c", "text": "cat"}, {"id": "cg", "text": "category"}],
        }
        spans = client.post("/annotations", json=payload).json()
        legacy = client.post("/annotations", json=dict(payload, mode="legacy")).json()
        assert spans["paragraphs"][0]["html"].count("<mark") == 1
        assert legacy["paragraphs"][0]["html"].count("<mark") == 2

    def test_unknown_color_renders_yellow(self, client):
        resp = client.post("/annotations", json={
            "paragraphs": [{"text": "abc", "start": 0}],
            "highlights": [{"id": "h", "text": "abc", "color": "purple"}],
        })
        assert resp.status_code == 200
        assert "#fef08a" in resp.json()["paragraphs"][0]["html"]

    def test_missing_highlights_is_422(self, client):
        resp = client.post("/annotations", json={"paragraphs": []})
        assert resp.status_code == 422

    def test_empty_highlight_text_is_422(self, client):
        resp = client.post("/annotations", json={
            "paragraphs": [], "highlights": [{"id": "h", "text": ""}],
        })
        assert resp.status_code == 422

    def test_unknown_mode_is_422(self, client):
        resp = client.post("/annotations", json={
            "paragraphs": [], "highlights": [], "mode": "fancy",
        })
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# POST /transcripts/render
# ---------------------------------------------------------------------------


class TestRender:

    def test_html_default(self, client, sample_fragment_dicts, highlight_dicts):
        resp = client.post("/transcripts/render", json={
            "source_id": "dQw4w9WgXcQ",
            "fragments": sample_fragment_dicts,
            "highlights": highlight_dicts,
        })
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert resp.headers["content-disposition"] == \
            'inline; filename="dQw4w9WgXcQ-transcript.html"'
        assert resp.text.count('<div class="transcript-paragraph"') == 3
        assert 'data-highlight-id="h-memory"' in resp.text

    def test_plain_text(self, client, sample_fragment_dicts, expected_paragraphs):
        resp = client.post("/transcripts/render", json={
            "fragments": sample_fragment_dicts, "format": "plain_text",
        })
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == "\n\n".join(t for t, _ in expected_paragraphs) + "\n"

    def test_paragraphs_json(self, client, sample_fragment_dicts, highlight_dicts):
        resp = client.post("/transcripts/render", json={
            "source_id": "talk",
            "language": "en",
            "fragments": sample_fragment_dicts,
            "highlights": highlight_dicts,
            "format": "paragraphs_json",
        })
        assert resp.status_code == 200
        data = json.loads(resp.text)
        assert data["source_id"] == "talk"
        assert data["language"] == "en"
        assert len(data["paragraphs"]) == 3
        assert [h["id"] for h in data["highlights"]] == ["h-memory", "h-spaced-rep"]

    def test_unknown_format_is_422(self, client):
        resp = client.post("/transcripts/render", json={"fragments": [], "format": "docx"})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# GET /transcripts/{video_id}
# ---------------------------------------------------------------------------


def _provider_returning(status_code, **body):
    """A _fetch_fragments stand-in backed by a real client on a mock transport."""
    transport = httpx.MockTransport(lambda request: httpx.Response(status_code, **body))

    async def fetch(video_id, language, api_key):
        async with SupadataClient(api_key=api_key, transport=transport) as provider:
            return await provider.fetch_transcript(video_id, language=language)
    return fetch


class TestGetTranscript:

    @pytest.fixture(autouse=True)
    def _api_key(self, monkeypatch):
        monkeypatch.setenv("SUPADATA_API_KEY", "test-key")

    def test_fetch_and_segment(self, client, sample_fragments, expected_paragraphs):
        with patch(FETCH_TARGET, new=AsyncMock(return_value=sample_fragments)) as fetch:
            resp = client.get("/transcripts/dQw4w9WgXcQ", params={"language": "en"})
        assert resp.status_code == 200
        fetch.assert_awaited_once_with("dQw4w9WgXcQ", "en", "test-key")
        body = resp.json()
        assert body["video_id"] == "dQw4w9WgXcQ"
        assert body["language"] == "en"
        assert body["duration"] == pytest.approx(27.0)
        assert body["raw"] == "\n\n".join(t for t, _ in expected_paragraphs)
        assert [(p["text"], p["start"]) for p in body["paragraphs"]] == expected_paragraphs
        assert len(body["fragments"]) == len(sample_fragments)
        assert body["fragments"][1] == {"text": "[Music]", "start": 2.0, "duration": 1.5}

    def test_default_language_is_auto(self, client, sample_fragments):
        with patch(FETCH_TARGET, new=AsyncMock(return_value=sample_fragments)) as fetch:
            client.get("/transcripts/dQw4w9WgXcQ")
        fetch.assert_awaited_once_with("dQw4w9WgXcQ", "auto", "test-key")

    def test_invalid_video_id_is_400(self, client):
        with patch(FETCH_TARGET, new=AsyncMock()) as fetch:
            resp = client.get("/transcripts/not_a_video_id")
        assert resp.status_code == 400
        fetch.assert_not_awaited()

    def test_unsupported_language_is_400(self, client):
        with patch(FETCH_TARGET, new=AsyncMock()) as fetch:
            resp = client.get("/transcripts/dQw4w9WgXcQ", params={"language": "xx"})
        assert resp.status_code == 400
        assert "Unsupported language" in resp.json()["detail"]
        fetch.assert_not_awaited()

    def test_not_available_is_404(self, client):
        error = TranscriptNotAvailableError("dQw4w9WgXcQ", "de")
        with patch(FETCH_TARGET, new=AsyncMock(side_effect=error)):
            resp = client.get("/transcripts/dQw4w9WgXcQ", params={"language": "de"})
        assert resp.status_code == 404
        assert resp.json()["detail"] == \
            "No transcript available for video dQw4w9WgXcQ in language 'de'"

    def test_pending_job_is_404(self, client):
        with patch(FETCH_TARGET, new=_provider_returning(202, json={"jobId": "abc"})):
            resp = client.get("/transcripts/dQw4w9WgXcQ")
        assert resp.status_code == 404

    def test_provider_error_is_502(self, client):
        error = SupadataAPIError(429, "Rate limit exceeded")
        with patch(FETCH_TARGET, new=AsyncMock(side_effect=error)):
            resp = client.get("/transcripts/dQw4w9WgXcQ")
        assert resp.status_code == 502
        assert "Rate limit exceeded" in resp.json()["detail"]

    @pytest.mark.parametrize("body", [
        {"text": "<html>oops</html>"},
        {"json": ["not", "an", "object"]},
    ])
    def test_malformed_provider_body_is_502(self, client, body):
        with patch(FETCH_TARGET, new=_provider_returning(200, **body)):
            resp = client.get("/transcripts/dQw4w9WgXcQ")
        assert resp.status_code == 502
        assert resp.json()["detail"].startswith("Transcript API error 200")

    def test_network_error_is_502(self, client):
        error = httpx.ConnectError("connection refused")
        with patch(FETCH_TARGET, new=AsyncMock(side_effect=error)):
            resp = client.get("/transcripts/dQw4w9WgXcQ")
        assert resp.status_code == 502
        assert "unreachable" in resp.json()["detail"]

    def test_missing_api_key_is_503(self, client, monkeypatch):
        monkeypatch.delenv("SUPADATA_API_KEY")
        with patch(FETCH_TARGET, new=AsyncMock()) as fetch:
            resp = client.get("/transcripts/dQw4w9WgXcQ")
        assert resp.status_code == 503
        assert "SUPADATA_API_KEY" in resp.json()["detail"]
        fetch.assert_not_awaited()


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


class TestMetadata:

    def test_formats(self, client):
        resp = client.get("/formats")
        assert resp.status_code == 200
        formats = {f["key"]: f for f in resp.json()}
        assert list(formats) == ["html", "paragraphs_json", "plain_text"]
        assert formats["html"] == {
            "key": "html",
            "name": "Annotated HTML",
            "suffix": "-transcript.html",
            "media_type": "text/html",
        }

    def test_languages(self, client):
        resp = client.get("/languages")
        assert resp.status_code == 200
        codes = [lang["code"] for lang in resp.json()]
        assert codes[0] == "auto"
        assert "es" in codes and "en" in codes

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "version": __version__}
