"""
OpenAI-compatible chat completion client.

Works with OpenAI and with local OpenAI-compatible servers (Ollama at
http://localhost:11434/v1, LocalAI at http://localhost:8080/v1). The client
returns the first choice's message content untouched; interpreting it is the
response validator's job.
"""

import time
from typing import Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from auto_classifier.backends.base_client import BaseBackendClient
from auto_classifier.backends.exceptions import (
    BackendError,
    BackendHTTPError,
    BackendRequestError,
    BackendResponseError,
)
from auto_classifier.models.llm_models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
)
from auto_classifier.monitoring.metrics import backend_tokens_total


logger = structlog.get_logger(__name__)


class ChatCompletionClient(BaseBackendClient):
    """
    Generative-chat backend client.

    API Endpoints:
    - POST /chat/completions: system + user messages, returns choices[0].message.content
    """

    engine_name = "generative"

    async def generate(
        self,
        system_role: str,
        prompt: str,
        model: str,
        max_tokens: int = 150,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
        frequency_penalty: Optional[float] = None,
        presence_penalty: Optional[float] = None,
    ) -> ChatCompletionResponse:
        """
        Generate a completion for one system/user message pair.

        POST {base_url}/chat/completions with payload:
        {
            "model": "gpt-4.1-mini",
            "messages": [
                {"role": "system", "content": "..."},
                {"role": "user", "content": "..."}
            ],
            "max_tokens": 150,
            "temperature": 0.2,        # only when set
            "top_p": 0.95,             # only when set
            "frequency_penalty": 0,    # only when set
            "presence_penalty": 0      # only when set
        }

        Raises:
            BackendHTTPError: Non-2xx status (carries status and body)
            BackendConnectionError: Network errors and timeouts
            BackendRequestError: Sampling parameters outside the accepted range
            BackendResponseError: Success body without a well-formed first choice
        """
        try:
            request = ChatCompletionRequest(
                model=model,
                messages=[
                    ChatMessage(role="system", content=system_role),
                    ChatMessage(role="user", content=prompt),
                ],
                max_tokens=max_tokens,
                temperature=temperature,
                top_p=top_p,
                frequency_penalty=frequency_penalty,
                presence_penalty=presence_penalty,
            )
        except PydanticValidationError as e:
            fields = sorted({str(error["loc"][0]) for error in e.errors() if error["loc"]})
            raise BackendRequestError(
                f"Invalid chat completion parameters: {', '.join(fields)}",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

        logger.info(
            "Sending chat completion request",
            base_url=self.base_url,
            model=model,
            prompt_length=len(prompt),
            max_tokens=max_tokens,
            temperature=temperature,
        )

        start_time = time.time()
        response = await self._post_json("/chat/completions", request.to_payload())

        if not response.is_success:
            logger.error(
                "Chat completion HTTP error",
                status_code=response.status_code,
                body=response.text[:2000],
            )
            raise BackendHTTPError(
                f"Chat completion API error: {response.status_code}",
                status=response.status_code,
                body=response.text,
            )

        data = self._parse_json_body(response)
        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices or not isinstance(choices, list):
            raise BackendResponseError(
                "Chat completion response has no choices",
                details={"body": response.text[:2000]},
            )

        first_choice = choices[0] or {}
        message = (first_choice.get("message") or {}) if isinstance(first_choice, dict) else None
        usage = data.get("usage") or {}
        if not isinstance(message, dict) or not isinstance(usage, dict):
            raise BackendResponseError(
                "Chat completion response is malformed",
                details={"body": response.text[:2000]},
            )

        content = message.get("content") or ""
        if not isinstance(content, str):
            raise BackendResponseError(
                "Chat completion content is not text",
                details={"body": response.text[:2000]},
            )
        total_tokens = usage.get("total_tokens")
        if not isinstance(total_tokens, int) or isinstance(total_tokens, bool) or total_tokens < 0:
            total_tokens = None
        reported_model = data.get("model")
        if not isinstance(reported_model, str) or not reported_model:
            reported_model = model
        finish_reason = first_choice.get("finish_reason")
        if not isinstance(finish_reason, str):
            finish_reason = None
        latency_ms = int((time.time() - start_time) * 1000)

        if total_tokens:
            backend_tokens_total.labels(engine=self.engine_name).inc(total_tokens)

        logger.info(
            "Chat completion successful",
            model=reported_model,
            latency_ms=latency_ms,
            total_tokens=total_tokens,
            finish_reason=finish_reason,
            content_length=len(content),
        )

        return ChatCompletionResponse(
            content=content,
            model=reported_model,
            finish_reason=finish_reason,
            total_tokens=total_tokens,
            latency_ms=latency_ms,
        )

    async def health_check(self, model: str = "gpt-4.1-mini") -> bool:
        """
        Send a minimal 'test' prompt with an empty system role.

        Returns True if the server answered with a completion, False otherwise.
        """
        try:
            await self.generate("", "test", model=model, max_tokens=16)
            logger.info("Chat completion API test passed", base_url=self.base_url, model=model)
            return True
        except BackendError as e:
            logger.warning(
                "Chat completion API test failed",
                base_url=self.base_url,
                model=model,
                error=e.message,
                details=e.details,
            )
            return False
