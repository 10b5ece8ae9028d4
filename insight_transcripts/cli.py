"""Command-line interface for the insight transcript engine.

WHY: Users and scripts need a way to turn a video (or a saved caption
dump) into readable, highlighted transcript files without the web app.
The CLI wires the whole pipeline (caption fetch or load, segmentation,
highlight loading, formatter output, file saving) behind one command.

HOW: Uses argparse. The positional source is either a fragments JSON
file (list of {text, start, duration}) or a YouTube URL/video id, which
is fetched through SupadataClient via asyncio.run(). Status messages go
to stderr; output files are saved to --output-dir (default: CWD).

RULES:
- Source: existing *.json file → load fragments; otherwise → video id
- --highlights: JSON list of stored highlights, or {"highlights": [...]}
- --formats: comma-separated formatter keys (default: all registered)
- Output naming: {stem}{suffix}, numeric suffix on conflicts (-transcript-2.html)
- Status output goes to stderr (not stdout); --verbose adds debug logging
- Exit code 1 on any error, with "Error: ..." on stderr
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import httpx

from insight_transcripts.api.client import (
    SupadataAPIError,
    SupadataClient,
    TranscriptNotAvailableError,
)
from insight_transcripts.config import (
    ANNOTATION_MODE,
    ANNOTATION_MODES,
    DEFAULT_TRANSCRIPT_LANGUAGE,
    TRANSCRIPT_LANGUAGES,
)
from insight_transcripts.core.highlights import highlights_from_dicts
from insight_transcripts.core.ir import CaptionFragment, Highlight, InvalidArgumentError
from insight_transcripts.core.segmenter import build_transcript
from insight_transcripts.core.sources import extract_video_id
from insight_transcripts.formatters import FORMATTERS
from insight_transcripts.formatters.base import FormatterOutput


class CLIError(Exception):
    """A user-facing error; main() prints it and exits with status 1."""


def _status(msg: str) -> None:
    """Print a status message to stderr.

    Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Resolve the output file path, adding a numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. talk-transcript.html)
    - Conflict: split suffix at last dot, insert counter before extension
      (e.g. talk-transcript-2.html)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Save a single formatter output to disk and return its path."""
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _read_json(path: Path, what: str) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as exc:
        raise CLIError("Cannot read {} file {}: {}".format(what, path, exc))
    except json.JSONDecodeError as exc:
        raise CLIError("{} file {} is not valid JSON: {}".format(what.capitalize(), path, exc))


def load_fragments(path: Path) -> List[CaptionFragment]:
    """Load caption fragments from a JSON file.

    Accepts a bare list of {text, start, duration} objects, or an object
    with the list under "fragments" or "segments".
    """
    data = _read_json(path, "fragments")
    if isinstance(data, dict):
        data = data.get("fragments", data.get("segments"))
    if not isinstance(data, list):
        raise CLIError("Fragments file {} must contain a list of fragments".format(path))
    try:
        return [CaptionFragment.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as exc:
        raise CLIError("Invalid fragment in {}: {}".format(path, exc))


def load_highlights(path: Path) -> List[Highlight]:
    """Load stored highlights from a JSON file."""
    data = _read_json(path, "highlights")
    if isinstance(data, dict):
        data = data.get("highlights")
    if not isinstance(data, list):
        raise CLIError("Highlights file {} must contain a list of highlights".format(path))
    try:
        return highlights_from_dicts(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise CLIError("Invalid highlight in {}: {}".format(path, exc))


async def _fetch_fragments(video_id: str, language: str) -> List[CaptionFragment]:
    async with SupadataClient() as client:
        return await client.fetch_transcript(video_id, language=language, on_status=_status)


def _load_source(source: str, language: str) -> tuple:
    """Resolve the source argument to (stem, fragments)."""
    source_path = Path(source)
    if source_path.suffix.lower() == ".json" and source_path.is_file():
        _status("Loading fragments from {}...".format(source_path))
        return source_path.stem, load_fragments(source_path)

    video_id = extract_video_id(source)
    if not video_id:
        raise CLIError(
            "'{}' is neither a fragments JSON file nor a YouTube URL or video id".format(source)
        )
    try:
        fragments = asyncio.run(_fetch_fragments(video_id, language))
    except TranscriptNotAvailableError as exc:
        raise CLIError(str(exc))
    except SupadataAPIError as exc:
        raise CLIError(str(exc))
    except httpx.HTTPError as exc:
        raise CLIError("Could not reach the transcript API: {}".format(exc))
    return video_id, fragments


def run(args: argparse.Namespace) -> List[Path]:
    """Execute the pipeline for parsed arguments and return saved paths.

    Raises:
        CLIError: on any user-facing failure.
    """
    output_dir = Path(args.output_dir).resolve() if args.output_dir else Path.cwd()
    if not output_dir.is_dir():
        raise CLIError("Output directory does not exist: {}".format(output_dir))

    if args.formats:
        format_keys = [f.strip() for f in args.formats.split(",") if f.strip()]
        for key in format_keys:
            if key not in FORMATTERS:
                available = ", ".join(sorted(FORMATTERS.keys()))
                raise CLIError("Unknown format '{}'. Available formats: {}".format(key, available))
    else:
        format_keys = list(FORMATTERS.keys())

    highlights: List[Highlight] = []
    if args.highlights:
        highlights = load_highlights(Path(args.highlights))
        _status("  Loaded {} highlights".format(len(highlights)))

    stem, fragments = _load_source(args.source, args.language)

    transcript = build_transcript(fragments, source_id=stem, language=args.language)
    transcript.highlights = highlights
    _status("  {} fragments → {} paragraphs".format(
        len(transcript.fragments), len(transcript.paragraphs),
    ))

    _status("Formatting output...")
    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key](annotation_mode=args.annotation_mode)
        for output in formatter.format(transcript):
            saved_path = _save_output(output, stem, output_dir)
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))
    return saved_files


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="insight_transcripts",
        description="Segment video captions into readable paragraphs and render "
                    "them with highlights (HTML, plain text, paragraph JSON).",
    )

    parser.add_argument(
        "source",
        help="Fragments JSON file, or a YouTube URL / video id to fetch captions for.",
    )

    parser.add_argument(
        "--language",
        default=DEFAULT_TRANSCRIPT_LANGUAGE,
        choices=sorted(TRANSCRIPT_LANGUAGES.keys()),
        help="Transcript language to request (default: %(default)s).",
    )

    parser.add_argument(
        "--highlights",
        default=None,
        help="Path to a JSON file with the source item's highlights.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: current directory).",
    )

    parser.add_argument(
        "--annotation-mode",
        default=ANNOTATION_MODE,
        choices=ANNOTATION_MODES,
        help="Highlight rendering: non-overlapping spans, or legacy "
             "sequential replacement (default: %(default)s).",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m insight_transcripts``.

    argv=None means use sys.argv; explicit argv is for testing.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    try:
        run(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except (CLIError, InvalidArgumentError, ValueError) as exc:
        # ValueError covers a missing API key
        print("Error: {}".format(exc), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
