"""
Stage 1: JSON Parse Validation.

Strip a code-fence wrapper from the raw model answer and parse it into a
Python dict. Hard-fail stage: malformed JSON aborts the classification.
"""

import json
import structlog

from auto_classifier.backends.text_utils import strip_code_fence
from auto_classifier.monitoring.metrics import validation_failures_total
from .exceptions import ResponseParseError

logger = structlog.get_logger(__name__)


class Stage1JSONParse:
    """
    Stage 1 validator: fenced-or-plain JSON string to dict.

    Raises ResponseParseError on malformed JSON.
    """

    def validate(self, content: str) -> dict:
        """
        Parse JSON content from the model's answer.

        Args:
            content: Raw message content, optionally wrapped in ```json ... ```

        Returns:
            Parsed dict representation

        Raises:
            ResponseParseError: If content is empty, not JSON, or not a JSON object
        """
        if not content or not content.strip():
            validation_failures_total.labels(
                stage="parse", error_type="empty_content"
            ).inc()
            raise ResponseParseError(
                "Model response content is empty or whitespace-only",
                raw_content=content,
                parse_error="Empty content",
            )

        unwrapped = strip_code_fence(content)

        try:
            parsed = json.loads(unwrapped)
        except json.JSONDecodeError as e:
            validation_failures_total.labels(
                stage="parse", error_type="json_decode_error"
            ).inc()
            raise ResponseParseError(
                f"JSON parsing error - {e.msg}",
                raw_content=content,
                parse_error=f"{e.msg} at line {e.lineno} col {e.colno}",
            ) from e

        if not isinstance(parsed, dict):
            validation_failures_total.labels(
                stage="parse", error_type="not_json_object"
            ).inc()
            raise ResponseParseError(
                f"Model response is not a JSON object (got {type(parsed).__name__})",
                raw_content=content,
                parse_error=f"Expected dict, got {type(parsed).__name__}",
            )

        logger.debug("Stage 1: parsed model response", top_level_keys=sorted(parsed))
        return parsed
