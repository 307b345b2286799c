"""
Validation-specific exceptions for the generative response validator.

Both are terminal for the current invocation: the orchestrator reports them
to the user and places no labels.
"""

from typing import Any, Optional

from auto_classifier.exceptions import AutoClassifierError


class ResponseValidationError(AutoClassifierError):
    """Base exception for all response validation errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ResponseParseError(ResponseValidationError):
    """
    The model's answer is not the expected JSON document.

    Raised when the text is not JSON, is not a JSON object, or its
    `outputs` field is not an array of strings.
    """

    def __init__(self, message: str, raw_content: str | None = None, parse_error: str | None = None):
        """
        Args:
            message: Error description
            raw_content: Model output (first 500 chars kept for debugging)
            parse_error: Original json.JSONDecodeError message
        """
        details = {}
        if raw_content:
            details["content_snippet"] = raw_content[:500]
        if parse_error:
            details["parse_error"] = parse_error
        super().__init__(message, details)


class ReliabilityError(ResponseValidationError):
    """
    The model reported a reliability at or below the threshold while
    choosing among reference labels. An explicit null score counts as 0.
    """

    def __init__(self, score: Optional[float], threshold: float):
        self.score = score
        self.threshold = threshold
        shown = "null" if score is None else score
        super().__init__(
            f"Response has low reliability ({shown})",
            details={"reliability": score, "threshold": threshold},
        )
