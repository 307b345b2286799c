"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
Backends are never contacted: HTTP traffic goes through httpx.MockTransport.
"""

import json
from typing import Any, Callable, Dict, Optional

import httpx
import pytest

from auto_classifier.config import Settings
from auto_classifier.models.enums import ClassifierEngine


class RecordingBackend:
    """httpx.MockTransport wrapper that keeps every request it answered.

    Usage:
        backend = RecordingBackend(lambda request: httpx.Response(200, json={...}))
        client = ChatCompletionClient(base_url="...", transport=backend.transport)
    """

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def json_body(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[index].content)


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.MAX_SUGGESTIONS = 1
    """
    return Settings(
        # === Application ===
        APP_NAME="Auto Classifier",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Generative ===
        CLASSIFIER_ENGINE=ClassifierEngine.GENERATIVE,
        API_KEY="sk-test",
        BASE_URL="https://api.openai.test/v1",
        CHAT_MODEL="gpt-4.1-mini",

        # === Zero-shot ===
        JINA_API_KEY="jina_test",
        JINA_BASE_URL="https://api.jina.test/v1",

        # === References ===
        USE_REFERENCES=True,
        REFERENCES=["animals", "pets", "food"],

        # === Output ===
        MAX_SUGGESTIONS=3,
    )


@pytest.fixture
def zero_shot_settings(test_settings: Settings) -> Settings:
    """Test settings with the zero-shot engine selected."""
    test_settings.CLASSIFIER_ENGINE = ClassifierEngine.ZERO_SHOT
    return test_settings


@pytest.fixture
def recording_backend() -> Callable[..., RecordingBackend]:
    """Factory fixture to create a RecordingBackend.

    Usage:
        def test_something(recording_backend):
            backend = recording_backend(lambda request: httpx.Response(200, json={}))
    """
    return RecordingBackend


@pytest.fixture
def chat_completion_body() -> Callable[..., Dict[str, Any]]:
    """Factory fixture for an OpenAI-compatible /chat/completions body.

    Usage:
        body = chat_completion_body('{"reliability": 0.9, "outputs": ["a"]}')
    """
    def _create(
        content: str,
        total_tokens: Optional[int] = 42,
        model: str = "gpt-4.1-mini",
        finish_reason: str = "stop",
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "model": model,
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": finish_reason,
                }
            ],
        }
        if total_tokens is not None:
            body["usage"] = {
                "prompt_tokens": total_tokens - 2,
                "completion_tokens": 2,
                "total_tokens": total_tokens,
            }
        return body

    return _create


@pytest.fixture
def zero_shot_body() -> Callable[..., Dict[str, Any]]:
    """Factory fixture for a Jina-style /classify body with one input item.

    Usage:
        body = zero_shot_body([("positive", 0.95), ("negative", 0.05)])
    """
    def _create(
        predictions: list[tuple[str, float]],
        total_tokens: Optional[int] = 12,
    ) -> Dict[str, Any]:
        best_label, best_score = max(predictions, key=lambda item: item[1]) if predictions else (None, None)
        return {
            "usage": {"total_tokens": total_tokens},
            "data": [
                {
                    "object": "classification",
                    "index": 0,
                    "prediction": best_label,
                    "score": best_score,
                    "predictions": [
                        {"label": label, "score": score} for label, score in predictions
                    ],
                }
            ],
        }

    return _create
