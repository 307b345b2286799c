"""
Text processing utilities for the backend layer.

Provides code-fence stripping for model output, frontmatter stripping and
truncation for prompt input, and filename sanitization for the filename
suggestion pipeline.
"""

import re

# ```json ... ``` (any or no language tag) wrapping the whole text
_FENCE_OPEN_PATTERN = re.compile(r"\A\s*```[\w-]*[ \t]*(?:\r?\n|\Z)")
_FENCE_CLOSE_PATTERN = re.compile(r"(?:\r?\n|\A)[ \t]*```\s*\Z")

# YAML frontmatter block at the very start of a note, possibly empty
_FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?:.*?\r?\n)?---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)

# Characters that are unsafe in file paths on at least one platform
UNSAFE_FILENAME_CHARS = '"/<>:\\|?*'
_UNSAFE_FILENAME_PATTERN = re.compile(r'["/<>:\\|?*]')
_WHITESPACE_RUN_PATTERN = re.compile(r"\s+")


def strip_code_fence(text: str) -> str:
    """
    Remove a Markdown code-fence wrapper around the whole text.

    Only a fence opening at the start and/or closing at the end is removed;
    backticks inside the text are left alone.

    Examples:
        >>> strip_code_fence('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
        >>> strip_code_fence('{"a": 1}')
        '{"a": 1}'
    """
    stripped = _FENCE_OPEN_PATTERN.sub("", text, count=1)
    stripped = _FENCE_CLOSE_PATTERN.sub("", stripped, count=1)
    return stripped


def split_frontmatter(content: str) -> tuple[str, str]:
    """
    Split a note into (frontmatter_block, body).

    The frontmatter block includes its `---` delimiters; it is an empty
    string when the note has none.
    """
    match = _FRONTMATTER_PATTERN.match(content)
    if not match:
        return "", content
    return match.group(0), content[match.end():]


def strip_frontmatter(content: str) -> str:
    """Return the note body without its leading frontmatter block."""
    return split_frontmatter(content)[1]


def truncate_text(text: str, max_chars: int) -> str:
    """Hard-truncate text to at most max_chars characters."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars]


def sanitize_filename(text: str, max_length: int = 60) -> str:
    """
    Turn a model completion into a path-safe filename (without extension).

    Steps:
    1. Strip a code-fence wrapper
    2. Remove the characters " / < > : \\ | ? *
    3. Collapse whitespace runs (including newlines) into single spaces
    4. Truncate to max_length and trim surrounding whitespace

    The function is idempotent: sanitizing an already sanitized name
    returns it unchanged.

    Returns:
        Sanitized name, possibly empty
    """
    # Removing characters can expose a new fence ("```/" -> "```"), so
    # repeat until stable. Every pass after the first only shortens the text.
    previous = None
    cleaned = text
    while cleaned != previous:
        previous = cleaned
        cleaned = _sanitize_once(cleaned, max_length)
    return cleaned


def _sanitize_once(text: str, max_length: int) -> str:
    cleaned = strip_code_fence(text)
    cleaned = _UNSAFE_FILENAME_PATTERN.sub("", cleaned)
    cleaned = _WHITESPACE_RUN_PATTERN.sub(" ", cleaned).strip()
    return cleaned[:max_length].strip()
