"""
Response Validator: staged validation of generative answers.

Coordinates the three stages:
- Stage 1: JSON parse after code-fence stripping (hard fail)
- Stage 2: `outputs` must be an array of strings (hard fail)
- Stage 3: reliability gate, references mode only (hard fail)
"""

import structlog

from .exceptions import ResponseValidationError
from .stage1_json_parse import Stage1JSONParse
from .stage2_outputs import Stage2Outputs
from .stage3_reliability import DEFAULT_RELIABILITY_THRESHOLD, Stage3Reliability

logger = structlog.get_logger(__name__)


class ResponseValidator:
    """
    Validate a generative answer and return its labels in the model's order.
    """

    def __init__(self, reliability_threshold: float = DEFAULT_RELIABILITY_THRESHOLD):
        self.stage1 = Stage1JSONParse()
        self.stage2 = Stage2Outputs()
        self.stage3 = Stage3Reliability(threshold=reliability_threshold)

    def validate(self, raw_text: str, references_in_use: bool) -> list[str]:
        """
        Run all stages on the raw answer.

        Args:
            raw_text: Message content returned by the chat backend
            references_in_use: Whether the model was asked to choose among
                reference labels (enables the reliability gate)

        Returns:
            Labels exactly as listed in `outputs`

        Raises:
            ResponseParseError: Stages 1-2
            ReliabilityError: Stage 3
        """
        try:
            parsed = self.stage1.validate(raw_text)
            outputs = self.stage2.validate(parsed)
            self.stage3.validate(parsed, references_in_use)
        except ResponseValidationError as e:
            logger.warning(
                "Model response rejected",
                error_type=type(e).__name__,
                error=e.message,
                details=e.details,
                raw_response=raw_text[:2000],
            )
            raise

        logger.info(
            "Model response validated",
            output_count=len(outputs),
            reliability=parsed.get("reliability"),
            references_in_use=references_in_use,
        )
        return outputs
