"""
Reference label resolution.

Reference labels are configuration, not classification input: they are
resolved here from the configured source and stored in
Settings.REFERENCES, which the orchestrator later reads as-is.
"""

import re
from typing import Optional

import structlog

from auto_classifier.config import Settings
from auto_classifier.document.protocols import VaultHost
from auto_classifier.models.enums import ClassifierEngine, ReferenceType


logger = structlog.get_logger(__name__)

_MANUAL_SEPARATOR_PATTERN = re.compile(r",|\n")


def parse_manual_references(text: str) -> list[str]:
    """Split manually entered labels on commas and newlines."""
    labels = (part.strip() for part in _MANUAL_SEPARATOR_PATTERN.split(text))
    return [label for label in labels if label]


def resolve_references(
    settings: Settings,
    vault: VaultHost,
    value: Optional[str] = None,
) -> list[str]:
    """
    Resolve Settings.REFERENCES from the configured reference type.

    Args:
        settings: Settings to update in place
        vault: Source of known labels (ALL and FILTER types)
        value: New filter regex (FILTER) or manual label text (MANUAL);
            when omitted the stored FILTER_REGEX / MANUAL_REFERENCES are used

    Returns:
        The resolved reference labels
    """
    reference_type = settings.REFERENCE_TYPE

    if reference_type == ReferenceType.ALL:
        references = vault.list_known_labels()
    elif reference_type == ReferenceType.FILTER:
        if value:
            settings.FILTER_REGEX = value
        references = vault.list_known_labels(settings.FILTER_REGEX or None)
    else:
        if value:
            settings.MANUAL_REFERENCES = parse_manual_references(value)
        references = list(settings.MANUAL_REFERENCES)

    settings.REFERENCES = references
    logger.info(
        "Reference labels resolved",
        reference_type=reference_type.value,
        reference_count=len(references),
    )
    return references


def describe_references(settings: Settings) -> str:
    """
    One label per line, with a warning when the zero-shot ceiling is exceeded.
    """
    message = "\n".join(settings.REFERENCES)
    count = len(settings.REFERENCES)
    if settings.CLASSIFIER_ENGINE == ClassifierEngine.ZERO_SHOT and count > settings.ZERO_SHOT_MAX_LABELS:
        message += (
            f"\n\n⚠️ Warning: Jina AI supports maximum {settings.ZERO_SHOT_MAX_LABELS} tags, "
            f"but {count} were found. Please reduce the number of tags."
        )
    return message
