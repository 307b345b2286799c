"""
Classification data models.

Every object here is transient: created at the start of one user-triggered
operation (classify or filename suggestion) and discarded at its end.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from auto_classifier.models.enums import (
    ClassifierEngine,
    OutputKind,
    OutputLocation,
)


class ClassificationRequest(BaseModel):
    """
    Normalized classification request handed to an engine.

    reference_labels may be empty when the model is asked to propose new
    labels (use_references=False).
    """
    model_config = ConfigDict(frozen=True)

    input_text: str = Field(..., min_length=1)
    reference_labels: list[str] = Field(default_factory=list)
    engine: ClassifierEngine
    use_references: bool = True


class GenerativeEngineConfig(BaseModel):
    """Everything the generative-chat engine needs for one call."""
    model_config = ConfigDict(frozen=True)

    system_role: str
    prompt_template: str
    model_id: str
    max_tokens: int = Field(..., ge=1)
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    api_key: str = ""
    base_url: str


class ZeroShotEngineConfig(BaseModel):
    """Everything the zero-shot engine needs for one call."""
    model_config = ConfigDict(frozen=True)

    model_id: str
    api_key: str = ""
    base_url: str


class Usage(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_tokens: int = Field(..., ge=0)


class ClassificationResult(BaseModel):
    """Labels ranked best-first, plus token usage when the backend reports it."""
    model_config = ConfigDict(frozen=True)

    labels: list[str] = Field(default_factory=list)
    usage: Optional[Usage] = None


class PlacementDirective(BaseModel):
    """
    How and where a label is written into the document.

    `location` only applies to TAG and WIKILINK outputs; FRONTMATTER and
    TITLE placements ignore it.
    """
    model_config = ConfigDict(frozen=True)

    output_kind: OutputKind = OutputKind.TAG
    location: OutputLocation = OutputLocation.CURSOR
    frontmatter_key: str = "tags"
    overwrite: bool = False
    prefix: str = ""
    suffix: str = ""

    def decorate(self, label: str) -> str:
        """Apply prefix and suffix to a label."""
        return f"{self.prefix}{label}{self.suffix}"


class ClassifyOutcome(BaseModel):
    """Summary of a successful classify call."""
    model_config = ConfigDict(frozen=True)

    labels_applied: int = Field(..., ge=0)
    labels: list[str] = Field(default_factory=list)
    engine: ClassifierEngine
    total_tokens: Optional[int] = None


class FilenameSuggestion(BaseModel):
    """
    A proposed filename for one note.

    raw_text: completion text as returned by the model
    sanitized: path-safe name without extension (<= 60 chars)
    final_path: vault path after uniqueness resolution
    """
    model_config = ConfigDict(frozen=True)

    raw_text: str
    sanitized: str = Field(..., min_length=1)
    final_path: str
