"""
Orchestration of classification and filename suggestion.

Components:
- ClassificationOrchestrator: preconditions, engine call, truncation, placement
- FilenameSuggester: filename prompt, sanitization, uniqueness resolution
- engines: GenerativeEngine / ZeroShotEngine behind ClassificationEngine
- exceptions: precondition and outcome failures
"""

from auto_classifier.orchestration.classifier import ClassificationOrchestrator
from auto_classifier.orchestration.engines import (
    ClassificationEngine,
    GenerativeEngine,
    ZeroShotEngine,
    build_engine,
)
from auto_classifier.orchestration.filename import FilenameSuggester, resolve_unique_path
from auto_classifier.orchestration.exceptions import (
    PreconditionError,
    CredentialMissingError,
    ReferenceMissingError,
    ReferenceCountExceededError,
    InvalidSettingsError,
    InputMissingError,
    NoLabelsProducedError,
    PlacementError,
    UnsupportedOperationError,
    NoFilenameSuggestionError,
)

__all__ = [
    "ClassificationOrchestrator",
    "FilenameSuggester",
    "resolve_unique_path",
    "ClassificationEngine",
    "GenerativeEngine",
    "ZeroShotEngine",
    "build_engine",
    "PreconditionError",
    "CredentialMissingError",
    "ReferenceMissingError",
    "ReferenceCountExceededError",
    "InvalidSettingsError",
    "InputMissingError",
    "NoLabelsProducedError",
    "PlacementError",
    "UnsupportedOperationError",
    "NoFilenameSuggestionError",
]
