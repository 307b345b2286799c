"""
Host collaborator protocols.

The classification core never touches an editor or the filesystem directly.
It talks to these protocols, implemented by the host application (an editor
plugin, a CLI wrapper, or the Markdown reference host in markdown_note.py).

All methods are synchronous: they operate on local document structures and
are assumed not to fail under normal conditions.
"""

from typing import Optional, Protocol, runtime_checkable

from auto_classifier.models.classification_models import PlacementDirective
from auto_classifier.models.enums import InputType


@runtime_checkable
class Notifier(Protocol):
    def notify(self, message: str) -> None:
        """Show a short user-visible message."""
        ...


@runtime_checkable
class NoteHost(Notifier, Protocol):
    """The active note, as seen by the classification orchestrator."""

    def get_input_text(self, kind: InputType) -> Optional[str]:
        """Text for the given input source, or None/empty when unavailable."""
        ...

    def insert_label(self, label: str, directive: PlacementDirective) -> None:
        """Write one classified label into the note."""
        ...


@runtime_checkable
class VaultHost(Notifier, Protocol):
    """The note collection, as seen by reference resolution and filename suggestion."""

    def list_known_labels(self, filter_pattern: Optional[str] = None) -> list[str]:
        """All labels used in the vault, optionally filtered by a regular expression."""
        ...

    def read_note(self, path: str) -> tuple[str, str]:
        """(title, full content) of the note at path."""
        ...

    def path_exists(self, path: str) -> bool:
        ...

    def rename_file(self, path: str, new_path: str) -> None:
        ...
