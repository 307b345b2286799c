"""
Document/editor side of the pipeline.

- protocols.py: NoteHost / VaultHost collaborator protocols
- references.py: Reference label resolution (all / filter / manual)
- markdown_note.py: Markdown reference host (MarkdownNote, LocalVault)
"""

from auto_classifier.document.protocols import Notifier, NoteHost, VaultHost
from auto_classifier.document.markdown_note import FrontmatterError, LocalVault, MarkdownNote
from auto_classifier.document.references import (
    describe_references,
    parse_manual_references,
    resolve_references,
)

__all__ = [
    "Notifier",
    "NoteHost",
    "VaultHost",
    "FrontmatterError",
    "LocalVault",
    "MarkdownNote",
    "describe_references",
    "parse_manual_references",
    "resolve_references",
]
