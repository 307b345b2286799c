"""
Backend client abstraction and implementations.

Components:
- BaseBackendClient: Abstract base class for backend clients
- ChatCompletionClient: OpenAI-compatible /chat/completions (generative engine)
- JinaClient: Jina-style /classify (zero-shot engine)
- PromptBuilder: Classification and filename prompts
- text_utils: Code fences, frontmatter, truncation, filename sanitization
- exceptions: Backend-specific exceptions
"""

from auto_classifier.backends.base_client import BaseBackendClient
from auto_classifier.backends.chat_client import ChatCompletionClient
from auto_classifier.backends.jina_client import JinaClient
from auto_classifier.backends.prompt_builder import PromptBuilder
from auto_classifier.backends.exceptions import (
    BackendError,
    BackendHTTPError,
    BackendConnectionError,
    BackendResponseError,
    BackendRequestError,
)

__all__ = [
    "BaseBackendClient",
    "ChatCompletionClient",
    "JinaClient",
    "PromptBuilder",
    "BackendError",
    "BackendHTTPError",
    "BackendConnectionError",
    "BackendResponseError",
    "BackendRequestError",
]
