"""
Stage 2: Outputs shape validation.

The answer must carry an `outputs` array of label strings. The model's own
ordering is trusted: labels are returned exactly as listed.
"""

import structlog

from auto_classifier.monitoring.metrics import validation_failures_total
from .exceptions import ResponseParseError

logger = structlog.get_logger(__name__)


class Stage2Outputs:
    """Stage 2 validator: extract `outputs` as a list of strings."""

    def validate(self, parsed: dict) -> list[str]:
        """
        Args:
            parsed: Stage 1 result

        Returns:
            The `outputs` list, unmodified

        Raises:
            ResponseParseError: If `outputs` is missing, not an array, or holds
                non-string items
        """
        outputs = parsed.get("outputs")

        if not isinstance(outputs, list):
            validation_failures_total.labels(
                stage="parse", error_type="outputs_not_array"
            ).inc()
            raise ResponseParseError(
                "Output format error (expected array)",
                raw_content=str(parsed),
                parse_error=f"outputs is {type(outputs).__name__}",
            )

        non_strings = [item for item in outputs if not isinstance(item, str)]
        if non_strings:
            validation_failures_total.labels(
                stage="parse", error_type="outputs_not_strings"
            ).inc()
            raise ResponseParseError(
                "Output format error (expected array of strings)",
                raw_content=str(parsed),
                parse_error=f"{len(non_strings)} non-string item(s) in outputs",
            )

        logger.debug("Stage 2: outputs extracted", output_count=len(outputs))
        return outputs
