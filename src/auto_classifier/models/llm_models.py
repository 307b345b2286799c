"""
Wire-level data models for the two classification backends.

These models mirror the JSON bodies exchanged with the inference servers
(OpenAI-compatible chat completion and Jina-style zero-shot classify). They
are separate from the classification models so that the orchestrator never
depends on provider-specific field names.
"""

from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """A single chat message (system or user role)."""
    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionRequest(BaseModel):
    """
    Request body for POST {base_url}/chat/completions.

    Optional sampling parameters are omitted from the payload when unset so
    that the server applies its own defaults.
    """
    model_config = ConfigDict(frozen=True)

    model: str = Field(..., description="Model identifier (e.g., 'gpt-4.1-mini')")
    messages: list[ChatMessage] = Field(..., min_length=1)
    max_tokens: int = Field(..., ge=1, description="Maximum tokens to generate")
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    frequency_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    presence_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)

    def to_payload(self) -> Dict[str, Any]:
        """JSON body with unset optional fields dropped."""
        return self.model_dump(exclude_none=True)


class ChatCompletionResponse(BaseModel):
    """
    Normalized chat completion result.

    Only the first choice is kept; its message content is the raw text handed
    to the response validator.
    """
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Message content of the first choice")
    model: str = Field(..., description="Model reported by the server (or requested model)")
    finish_reason: Optional[str] = Field(default=None)
    total_tokens: Optional[int] = Field(default=None, description="usage.total_tokens if reported")
    latency_ms: int = Field(..., ge=0)


class ZeroShotInput(BaseModel):
    """One input item of a zero-shot batch."""
    model_config = ConfigDict(frozen=True)

    text: str


class ZeroShotRequest(BaseModel):
    """Request body for POST {base_url}/classify."""
    model_config = ConfigDict(frozen=True)

    model: str
    input: list[ZeroShotInput] = Field(..., min_length=1)
    labels: list[str]


class ZeroShotPrediction(BaseModel):
    """A candidate label with its score in [0, 1]."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    label: str
    score: float


class ZeroShotItem(BaseModel):
    """Classification result for one input item, in request order."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    object: str = "classification"
    index: int = 0
    prediction: Optional[str] = None
    score: Optional[float] = None
    predictions: list[ZeroShotPrediction] = Field(default_factory=list)


class ZeroShotUsage(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    total_tokens: Optional[int] = None


class ZeroShotResponse(BaseModel):
    """
    Response body of a successful (HTTP 200) zero-shot call.

    `data` preserves the server's ordering, one item per input text.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    usage: ZeroShotUsage = Field(default_factory=ZeroShotUsage)
    data: list[ZeroShotItem] = Field(default_factory=list)
