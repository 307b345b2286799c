"""
Pydantic data models for Auto Classifier.

Includes:
- Enums (ClassifierEngine, InputType, ReferenceType, OutputKind, OutputLocation)
- Classification models (ClassificationRequest, ClassificationResult,
  PlacementDirective, FilenameSuggestion, engine configs)
- Wire models for the chat completion and zero-shot backends
"""

from auto_classifier.models.enums import (
    ClassifierEngine,
    InputType,
    ReferenceType,
    OutputKind,
    OutputLocation,
)
from auto_classifier.models.classification_models import (
    ClassificationRequest,
    ClassificationResult,
    ClassifyOutcome,
    FilenameSuggestion,
    GenerativeEngineConfig,
    PlacementDirective,
    Usage,
    ZeroShotEngineConfig,
)
from auto_classifier.models.llm_models import (
    ChatMessage,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ZeroShotInput,
    ZeroShotRequest,
    ZeroShotPrediction,
    ZeroShotItem,
    ZeroShotUsage,
    ZeroShotResponse,
)

__all__ = [
    # Enums
    "ClassifierEngine",
    "InputType",
    "ReferenceType",
    "OutputKind",
    "OutputLocation",
    # Classification models
    "ClassificationRequest",
    "ClassificationResult",
    "ClassifyOutcome",
    "FilenameSuggestion",
    "GenerativeEngineConfig",
    "PlacementDirective",
    "Usage",
    "ZeroShotEngineConfig",
    # Wire models
    "ChatMessage",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ZeroShotInput",
    "ZeroShotRequest",
    "ZeroShotPrediction",
    "ZeroShotItem",
    "ZeroShotUsage",
    "ZeroShotResponse",
]
