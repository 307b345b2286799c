"""
Jina AI zero-shot classification client.

The classify endpoint scores every candidate label against every input text
in one batched call. Jina's default model (jina-embeddings-v3) accepts up to
8192 tokens per input and at most 256 candidate labels.
"""

import json
import time
from typing import Any, Sequence

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from auto_classifier.backends.base_client import BaseBackendClient
from auto_classifier.backends.exceptions import BackendError, BackendHTTPError, BackendResponseError
from auto_classifier.models.llm_models import ZeroShotInput, ZeroShotRequest, ZeroShotResponse
from auto_classifier.monitoring.metrics import backend_tokens_total


logger = structlog.get_logger(__name__)

HEALTH_CHECK_INPUT = "This is a test sentence for classification."
HEALTH_CHECK_LABELS = ["positive", "negative", "neutral"]


def extract_error_details(response: httpx.Response) -> Any:
    """
    Pull the most useful error description out of a failed response.

    JSON bodies yield their `detail` field, or the whole document
    re-serialized when there is no detail. Anything else yields the raw text.
    """
    try:
        error_json = json.loads(response.text)
    except json.JSONDecodeError:
        return response.text

    if isinstance(error_json, dict) and error_json.get("detail"):
        return error_json["detail"]
    return json.dumps(error_json)


class JinaClient(BaseBackendClient):
    """
    Zero-shot backend client.

    API Endpoints:
    - POST /classify: {model, input: [{text}, ...], labels: [...]}
    """

    engine_name = "zero_shot"

    async def classify(
        self,
        model: str,
        inputs: Sequence[str],
        labels: Sequence[str],
    ) -> ZeroShotResponse:
        """
        Classify a batch of texts against candidate labels.

        Response (HTTP 200):
        {
            "usage": {"total_tokens": 12},
            "data": [
                {
                    "object": "classification",
                    "index": 0,
                    "prediction": "positive",
                    "score": 0.95,
                    "predictions": [
                        {"label": "positive", "score": 0.95},
                        {"label": "negative", "score": 0.05}
                    ]
                }
            ]
        }

        `data` keeps one item per input in request order; the client does not
        assume a single-input batch.

        Raises:
            BackendHTTPError: Any status other than 200; `error_details` holds the
                parsed `detail` field when the body is JSON, else the raw text
            BackendConnectionError: Network errors and timeouts
            BackendResponseError: 200 body that does not match the response shape
        """
        request = ZeroShotRequest(
            model=model,
            input=[ZeroShotInput(text=text) for text in inputs],
            labels=list(labels),
        )

        logger.info(
            "Sending zero-shot classify request",
            base_url=self.base_url,
            model=model,
            input_count=len(request.input),
            label_count=len(request.labels),
        )

        start_time = time.time()
        response = await self._post_json("/classify", request.model_dump())

        if response.status_code != 200:
            error_details = extract_error_details(response)
            logger.error(
                "Jina AI HTTP error",
                status_code=response.status_code,
                error_details=error_details,
                body=response.text[:2000],
            )
            raise BackendHTTPError(
                f"Jina AI API Error: {response.status_code} - {error_details}",
                status=response.status_code,
                body=response.text,
                error_details=error_details,
            )

        data = self._parse_json_body(response)
        try:
            parsed = ZeroShotResponse.model_validate(data)
        except PydanticValidationError as e:
            logger.error(
                "Jina AI response does not match the expected shape",
                errors=e.errors(),
                body=response.text[:2000],
            )
            raise BackendResponseError(
                f"Unexpected Jina AI response shape: {e.error_count()} error(s)",
                details={"body": response.text[:2000]},
            ) from e

        if parsed.usage.total_tokens:
            backend_tokens_total.labels(engine=self.engine_name).inc(parsed.usage.total_tokens)

        logger.info(
            "Zero-shot classification successful",
            model=model,
            latency_ms=int((time.time() - start_time) * 1000),
            total_tokens=parsed.usage.total_tokens,
            item_count=len(parsed.data),
        )
        return parsed

    async def health_check(self, model: str = "jina-embeddings-v3") -> bool:
        """Classify a fixed test sentence against positive/negative/neutral."""
        try:
            response = await self.classify(model, [HEALTH_CHECK_INPUT], HEALTH_CHECK_LABELS)
            logger.info(
                "Jina AI API test passed",
                base_url=self.base_url,
                total_tokens=response.usage.total_tokens,
            )
            return True
        except BackendError as e:
            logger.warning(
                "Jina AI API test failed",
                base_url=self.base_url,
                error=e.message,
                details=e.details,
            )
            return False
