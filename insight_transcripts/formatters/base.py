"""Abstract base formatter and output container.

WHY: Every output format consumes the same Transcript IR but produces
different file content. This base class enforces a consistent interface
so the CLI and HTTP API can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements — a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type. Formatters that
render highlights take the annotation mode at construction.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list; every current formatter returns one item
- ``suffix`` starts with a hyphen, e.g. ``"-transcript.html"``
- The caller is responsible for prepending the source id or filename stem
- Formatters never mutate the Transcript
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from insight_transcripts.config import ANNOTATION_MODE
from insight_transcripts.core.ir import Transcript


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-transcript.html"`` → ``"dQw4w9WgXcQ-transcript.html"``.
        content: The file content.
        media_type: MIME type for the content, e.g. ``"text/html"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    suffix = ""
    media_type = "text/plain"

    def __init__(self, annotation_mode: str = ANNOTATION_MODE) -> None:
        self.annotation_mode = annotation_mode

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Annotated HTML'."""

    @abstractmethod
    def format(self, transcript: Transcript) -> list[FormatterOutput]:
        """Convert the Transcript IR into one or more output files.

        Args:
            transcript: Segmented transcript with the source item's
                        highlights attached.

        Returns:
            List of FormatterOutput objects.
        """
