"""FastAPI application with segmentation, annotation, and render routes.

WHY: The vault front end needs paragraphs for a freshly captured video,
annotated HTML whenever the highlight set changes, and rendered exports.
FastAPI provides request validation and OpenAPI docs for all of it.

HOW: A single FastAPI app exposes endpoints grouped by tags. All core
work is synchronous and cheap, so endpoints compute inline; only
GET /transcripts/{video_id} awaits the caption provider.

RULES:
- Error responses use the ErrorResponse schema
- Missing transcript → 404, provider error → 502, missing API key → 503
- GET /transcripts/{video_id} validates the id with extract_video_id
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from typing import Annotated, List

import httpx
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response

from insight_transcripts import __version__
from insight_transcripts.api.client import (
    SupadataAPIError,
    SupadataClient,
    TranscriptNotAvailableError,
)
from insight_transcripts.config import (
    DEFAULT_TRANSCRIPT_LANGUAGE,
    TRANSCRIPT_LANGUAGES,
    load_api_key,
)
from insight_transcripts.core.annotator import annotate_paragraphs
from insight_transcripts.core.ir import Paragraph
from insight_transcripts.core.segmenter import build_transcript, segment_fragments
from insight_transcripts.core.sources import extract_video_id
from insight_transcripts.core.timestamps import format_timestamp
from insight_transcripts.formatters import FORMATTERS
from insight_transcripts.formatters.plain_text import paragraphs_to_text
from insight_transcripts.server.models import (
    AnnotatedParagraphResponse,
    AnnotateRequest,
    AnnotateResponse,
    ErrorResponse,
    FormatInfo,
    FragmentPayload,
    HealthResponse,
    LanguageInfo,
    ParagraphResponse,
    RenderRequest,
    SegmentRequest,
    SegmentResponse,
    TranscriptResponseModel,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Insight Transcripts API",
    description=(
        "Segments timed video captions into readable paragraphs and overlays "
        "user highlights on them. Fetch a transcript by video id, or post "
        "fragments and highlights directly."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _paragraph_to_response(paragraph: Paragraph) -> ParagraphResponse:
    return ParagraphResponse(
        text=paragraph.text,
        start=paragraph.start_s,
        timestamp=format_timestamp(paragraph.start_s),
    )


async def _fetch_fragments(video_id: str, language: str, api_key: str):
    """Fetch provider fragments; isolated so tests can patch the provider."""
    async with SupadataClient(api_key=api_key) as client:
        return await client.fetch_transcript(video_id, language=language)


# ---------------------------------------------------------------------------
# Endpoints: Transcripts
# ---------------------------------------------------------------------------


@app.post(
    "/paragraphs",
    response_model=SegmentResponse,
    tags=["transcripts"],
    summary="Segment caption fragments into paragraphs",
    description=(
        "Clean each fragment and group fragments into paragraphs at pauses, "
        "sentence ends, and length limits. Returns paragraphs with seek times."
    ),
)
async def segment(request: SegmentRequest) -> SegmentResponse:
    paragraphs = segment_fragments([f.to_ir() for f in request.fragments])
    return SegmentResponse(paragraphs=[_paragraph_to_response(p) for p in paragraphs])


@app.post(
    "/annotations",
    response_model=AnnotateResponse,
    tags=["transcripts"],
    summary="Overlay highlights on paragraphs",
    description=(
        "Escape each paragraph and wrap every case-insensitive occurrence of "
        "each highlight in a colored marker carrying the highlight id."
    ),
)
async def annotate(request: AnnotateRequest) -> AnnotateResponse:
    annotated = annotate_paragraphs(
        [p.to_ir() for p in request.paragraphs],
        [h.to_ir() for h in request.highlights],
        mode=request.mode.value,
    )
    return AnnotateResponse(paragraphs=[
        AnnotatedParagraphResponse(html=a.html, start=a.start_s) for a in annotated
    ])


@app.post(
    "/transcripts/render",
    tags=["transcripts"],
    summary="Render a transcript in one output format",
    description=(
        "Segment the fragments, attach the highlights, and return the "
        "formatter's output (HTML, plain text, or paragraph JSON)."
    ),
    responses={200: {"content": {"text/html": {}, "text/plain": {}, "application/json": {}}}},
)
async def render(request: RenderRequest) -> Response:
    transcript = build_transcript(
        [f.to_ir() for f in request.fragments],
        source_id=request.source_id,
        language=request.language,
    )
    transcript.highlights = [h.to_ir() for h in request.highlights]

    formatter = FORMATTERS[request.format.value](annotation_mode=request.mode.value)
    output = formatter.format(transcript)[0]
    filename = "{}{}".format(request.source_id, output.suffix)
    return Response(
        content=output.content,
        media_type=output.media_type,
        headers={"Content-Disposition": 'inline; filename="{}"'.format(filename)},
    )


@app.get(
    "/transcripts/{video_id}",
    response_model=TranscriptResponseModel,
    tags=["transcripts"],
    summary="Fetch and segment a video transcript",
    description=(
        "Fetch timed captions from the transcript provider and return them "
        "together with the segmented paragraphs."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Not a YouTube video id or URL"},
        404: {"model": ErrorResponse, "description": "No transcript available"},
        502: {"model": ErrorResponse, "description": "Transcript provider error"},
        503: {"model": ErrorResponse, "description": "Transcript provider not configured"},
    },
)
async def get_transcript(
    video_id: str,
    language: Annotated[
        str,
        Query(description="Transcript language code, or 'auto' for the original track."),
    ] = DEFAULT_TRANSCRIPT_LANGUAGE,
) -> TranscriptResponseModel:
    resolved_id = extract_video_id(video_id)
    if not resolved_id:
        raise HTTPException(status_code=400, detail="Not a YouTube video id: {}".format(video_id))
    if language not in TRANSCRIPT_LANGUAGES:
        raise HTTPException(
            status_code=400,
            detail="Unsupported language '{}'. Available: {}".format(
                language, ", ".join(sorted(TRANSCRIPT_LANGUAGES))
            ),
        )

    try:
        api_key = load_api_key()
    except ValueError as exc:
        raise HTTPException(status_code=503, detail=str(exc))

    try:
        fragments = await _fetch_fragments(resolved_id, language, api_key)
    except TranscriptNotAvailableError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except SupadataAPIError as exc:
        logger.warning("Transcript provider error for %s: %s", resolved_id, exc)
        raise HTTPException(status_code=502, detail=str(exc))
    except httpx.HTTPError as exc:
        logger.exception("Transcript provider unreachable for %s", resolved_id)
        raise HTTPException(status_code=502, detail="Transcript provider unreachable: {}".format(exc))

    transcript = build_transcript(fragments, source_id=resolved_id, language=language)
    return TranscriptResponseModel(
        video_id=resolved_id,
        language=language,
        duration=transcript.duration_s,
        raw=paragraphs_to_text(transcript),
        paragraphs=[_paragraph_to_response(p) for p in transcript.paragraphs],
        fragments=[
            FragmentPayload(text=f.text, start=f.start_s, duration=f.duration_s)
            for f in transcript.fragments
        ],
    )


# ---------------------------------------------------------------------------
# Endpoints: Metadata
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["metadata"],
    summary="List available output formats",
)
async def list_formats() -> List[FormatInfo]:
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        result.append(FormatInfo(
            key=key,
            name=formatter.name,
            suffix=formatter.suffix,
            media_type=formatter.media_type,
        ))
    return result


@app.get(
    "/languages",
    response_model=List[LanguageInfo],
    tags=["metadata"],
    summary="List transcript languages",
)
async def list_languages() -> List[LanguageInfo]:
    return [LanguageInfo(code=code, label=label) for code, label in TRANSCRIPT_LANGUAGES.items()]


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the insight-transcripts-api console script."""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
