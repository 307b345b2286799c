"""
Root exception for Auto Classifier.

Every failure the pipeline can surface derives from AutoClassifierError, so
command handlers can catch one type, show `message` to the user and log
`details`. Layer-specific subclasses live next to the code that raises them:
- backends/exceptions.py: HTTP, connection and response-shape failures
- validation/exceptions.py: parse and reliability failures
- orchestration/exceptions.py: precondition and outcome failures
"""

from typing import Any


class AutoClassifierError(Exception):
    """
    Base exception for all Auto Classifier errors.

    All failures are terminal for the current invocation; none is retried.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message
