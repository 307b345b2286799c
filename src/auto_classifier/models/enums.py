"""
Enumerations shared by configuration, orchestration and the document layer.

All enums are closed sets - no values outside these sets are permitted.
"""

from enum import Enum


class ClassifierEngine(str, Enum):
    """
    Selectable classification backend.

    GENERATIVE: OpenAI-compatible chat completion model returning JSON text.
    ZERO_SHOT: Jina-style zero-shot classifier returning label/score pairs.
    """

    GENERATIVE = "generative"
    ZERO_SHOT = "zero_shot"

    @property
    def display_name(self) -> str:
        """Human-readable engine name used in notifications."""
        if self is ClassifierEngine.GENERATIVE:
            return "OpenAI-compatible API"
        return "Jina AI"


class InputType(str, Enum):
    """Which part of the note is sent for classification."""

    SELECTION = "selection"
    TITLE = "title"
    FRONTMATTER = "frontmatter"
    CONTENT = "content"


class ReferenceType(str, Enum):
    """
    Source of the reference label set.

    ALL: every label known to the vault
    FILTER: known labels matching FILTER_REGEX
    MANUAL: labels typed in by the user
    """

    ALL = "all"
    FILTER = "filter"
    MANUAL = "manual"


class OutputKind(str, Enum):
    """How a classified label is written into the note."""

    TAG = "tag"
    WIKILINK = "wikilink"
    FRONTMATTER = "frontmatter"
    TITLE = "title"


class OutputLocation(str, Enum):
    """Where TAG and WIKILINK outputs are inserted. Ignored for other kinds."""

    CURSOR = "cursor"
    CONTENT_TOP = "content_top"
