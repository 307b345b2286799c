"""
Markdown reference host.

MarkdownNote implements NoteHost for one Markdown note held in memory
(content, selection, cursor). LocalVault implements VaultHost over a
directory of Markdown files with YAML frontmatter. Together they let the
pipeline run end to end without an editor.

Frontmatter handling:
- Parsed with yaml.safe_load, written back with yaml.safe_dump
- A missing block is created on first frontmatter write
- A block that is not a YAML mapping raises FrontmatterError and is never
  rewritten
"""

import re
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Optional

import structlog
import yaml

from auto_classifier.backends.text_utils import sanitize_filename, split_frontmatter
from auto_classifier.models.classification_models import PlacementDirective
from auto_classifier.models.enums import InputType, OutputKind, OutputLocation


logger = structlog.get_logger(__name__)

# Inline tags: #tag, #nested/tag, #multi-word_tag; not purely numeric
_INLINE_TAG_PATTERN = re.compile(r"(?<![\w#/&])#([\w\-/]*[^\W\d][\w\-/]*)")


class FrontmatterError(ValueError):
    """The frontmatter block exists but is not a YAML mapping."""


def parse_frontmatter(content: str) -> tuple[Dict[str, Any], str]:
    """
    Parse YAML frontmatter from markdown content.

    Returns:
        (frontmatter_dict, content_without_frontmatter)

    Raises:
        FrontmatterError: Invalid YAML, or YAML that is not a mapping
    """
    block, body = split_frontmatter(content)
    if not block:
        return {}, content

    inner = block.strip().removeprefix("---").removesuffix("---")
    try:
        frontmatter = yaml.safe_load(inner)
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Could not parse frontmatter: {e}") from e
    if frontmatter is None:
        return {}, body
    if not isinstance(frontmatter, dict):
        raise FrontmatterError(
            f"Frontmatter must be a mapping, got {type(frontmatter).__name__}"
        )
    return frontmatter, body


def construct_file_content(frontmatter: Dict[str, Any], body: str) -> str:
    """Construct complete file content from frontmatter and body."""
    if not frontmatter:
        return body
    yaml_content = yaml.safe_dump(
        frontmatter, default_flow_style=False, allow_unicode=True, sort_keys=False
    )
    return f"---\n{yaml_content}---\n{body}"


def format_label(label: str, directive: PlacementDirective) -> str:
    """
    Render a label for inline insertion.

    TAG: #prefix+label+suffix with spaces replaced by underscores
    WIKILINK: [[prefix+label+suffix]]
    """
    decorated = directive.decorate(label)
    if directive.output_kind == OutputKind.WIKILINK:
        return f"[[{decorated}]]"
    return "#" + re.sub(r"\s+", "_", decorated.strip())


def _as_label_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item) for item in value if item is not None]
    return [part.strip() for part in str(value).split(",") if part.strip()]


class MarkdownNote:
    """
    One Markdown note in memory.

    Args:
        path: Vault-relative POSIX path (e.g., "Inbox/Cats.md")
        content: Full note text, frontmatter included
        selection: (start, end) character offsets of the current selection
        cursor: Character offset of the cursor; defaults to end of content
    """

    def __init__(
        self,
        path: str,
        content: str = "",
        selection: Optional[tuple[int, int]] = None,
        cursor: Optional[int] = None,
    ):
        self.path = path
        self.original_path = path
        self.content = content
        self.selection = selection
        self.cursor = len(content) if cursor is None else cursor
        self.notifications: list[str] = []

    @property
    def title(self) -> str:
        return PurePosixPath(self.path).stem

    @property
    def frontmatter(self) -> Dict[str, Any]:
        return parse_frontmatter(self.content)[0]

    # === NoteHost ===

    def get_input_text(self, kind: InputType) -> Optional[str]:
        if kind == InputType.SELECTION:
            if not self.selection:
                return None
            start, end = self.selection
            text = self.content[start:end]
        elif kind == InputType.TITLE:
            text = self.title
        elif kind == InputType.FRONTMATTER:
            block, _ = split_frontmatter(self.content)
            text = block.strip().removeprefix("---").removesuffix("---").strip()
        else:
            text = self.content
        return text or None

    def insert_label(self, label: str, directive: PlacementDirective) -> None:
        if directive.output_kind in (OutputKind.TAG, OutputKind.WIKILINK):
            text = format_label(label, directive)
            if directive.location == OutputLocation.CONTENT_TOP:
                self._insert_at_content_top(text)
            else:
                self._insert_at_cursor(text, directive.overwrite)
        elif directive.output_kind == OutputKind.FRONTMATTER:
            self._insert_at_frontmatter(
                directive.frontmatter_key, directive.decorate(label), directive.overwrite
            )
        else:
            self._insert_at_title(directive.decorate(label), directive.overwrite)

    def notify(self, message: str) -> None:
        self.notifications.append(message)
        logger.info("Notification", note=self.path, message=message)

    # === Placement ===

    def _insert_at_cursor(self, text: str, overwrite: bool) -> None:
        if overwrite and self.selection:
            start, end = self.selection
            self.content = self.content[:start] + text + self.content[end:]
            self.cursor = start + len(text)
            self.selection = None
            return

        insertion = f"{text} "
        self.content = self.content[: self.cursor] + insertion + self.content[self.cursor:]
        self.cursor += len(insertion)

    def _insert_at_content_top(self, text: str) -> None:
        block, body = split_frontmatter(self.content)
        if block and not block.endswith("\n"):
            block += "\n"
        self.content = f"{block}{text}\n{body}"
        shift = len(text) + 1
        if self.cursor >= len(block):
            self.cursor += shift

    def _insert_at_frontmatter(self, key: str, value: str, overwrite: bool) -> None:
        frontmatter, body = parse_frontmatter(self.content)
        if key in frontmatter and not overwrite:
            values = _as_label_list(frontmatter[key])
            if value not in values:
                values.append(value)
            frontmatter[key] = values
        elif overwrite:
            frontmatter[key] = value
        else:
            frontmatter[key] = [value]
        self.content = construct_file_content(frontmatter, body)
        self.cursor = min(self.cursor, len(self.content))

    def _insert_at_title(self, value: str, overwrite: bool) -> None:
        new_title = value if overwrite else f"{self.title} {value}"
        new_title = sanitize_filename(new_title, max_length=255)
        if not new_title:
            return
        current = PurePosixPath(self.path)
        self.path = str(current.with_name(f"{new_title}{current.suffix or '.md'}"))


class LocalVault:
    """
    A directory of Markdown notes.

    Paths passed to and returned by this class are POSIX paths relative to
    the vault root.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self.notifications: list[str] = []

    def _resolve(self, path: str) -> Path:
        return self.root / PurePosixPath(path)

    # === VaultHost ===

    def path_exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def rename_file(self, path: str, new_path: str) -> None:
        source = self._resolve(path)
        target = self._resolve(new_path)
        if target.exists():
            raise FileExistsError(f"Target already exists: {new_path}")
        target.parent.mkdir(parents=True, exist_ok=True)
        source.rename(target)
        logger.info("Note renamed", path=path, new_path=new_path)

    def read_note(self, path: str) -> tuple[str, str]:
        content = self._resolve(path).read_text(encoding="utf-8")
        return PurePosixPath(path).stem, content

    def list_known_labels(self, filter_pattern: Optional[str] = None) -> list[str]:
        """
        Collect tags from every note: frontmatter `tags` plus inline #tags.

        Args:
            filter_pattern: Regular expression; only labels it matches
                (re.search) are returned

        Raises:
            re.error: Invalid filter_pattern
        """
        matcher = re.compile(filter_pattern) if filter_pattern else None
        labels: set[str] = set()

        for note_path in sorted(self.root.rglob("*.md")):
            content = note_path.read_text(encoding="utf-8")
            try:
                frontmatter, body = parse_frontmatter(content)
            except FrontmatterError as e:
                logger.warning(
                    "Skipping unreadable frontmatter",
                    note=note_path.relative_to(self.root).as_posix(),
                    error=str(e),
                )
                frontmatter, body = {}, split_frontmatter(content)[1]
            for tag in _as_label_list(frontmatter.get("tags")):
                labels.add(tag.lstrip("#"))
            labels.update(_INLINE_TAG_PATTERN.findall(body))

        result = sorted(label for label in labels if label)
        if matcher is not None:
            result = [label for label in result if matcher.search(label)]
        return result

    def notify(self, message: str) -> None:
        self.notifications.append(message)
        logger.info("Notification", vault=str(self.root), message=message)

    # === Note I/O ===

    def open_note(
        self,
        path: str,
        selection: Optional[tuple[int, int]] = None,
        cursor: Optional[int] = None,
    ) -> MarkdownNote:
        _, content = self.read_note(path)
        return MarkdownNote(path, content, selection=selection, cursor=cursor)

    def save_note(self, note: MarkdownNote) -> None:
        """Write note content; a title placement moves the file first."""
        if note.path != note.original_path and self.path_exists(note.original_path):
            self.rename_file(note.original_path, note.path)
            note.original_path = note.path
        target = self._resolve(note.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(note.content, encoding="utf-8")
