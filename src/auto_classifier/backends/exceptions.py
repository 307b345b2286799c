"""
Custom exceptions for the backend client layer.

These exceptions let the orchestrator distinguish transport failures from
server-side rejections and from malformed success bodies. None of them is
retried: a single failed call surfaces directly to the user.
"""

from typing import Any, Optional

from auto_classifier.exceptions import AutoClassifierError


class BackendError(AutoClassifierError):
    """
    Base exception for all backend client errors.

    Allows catching any backend-related error with a single except clause.
    """
    pass


class BackendHTTPError(BackendError):
    """
    Raised when the backend answers with a non-success status.

    Attributes:
        status: HTTP status code
        body: Raw response body, kept for diagnostics
        error_details: Parsed error detail (zero-shot backend) or the raw body
    """

    def __init__(
        self,
        message: str,
        status: int,
        body: str,
        error_details: Optional[Any] = None,
    ):
        self.status = status
        self.body = body
        self.error_details = error_details if error_details is not None else body
        super().__init__(
            message,
            details={"status": status, "body": body[:2000], "error_details": self.error_details},
        )


class BackendConnectionError(BackendError):
    """
    Raised when the backend cannot be reached.

    Includes DNS failures, refused connections and timeouts.
    """
    pass


class BackendResponseError(BackendError):
    """
    Raised when a success response does not have the expected shape.

    Example: a chat completion without choices, or a classify body that is
    not JSON.
    """
    pass


class BackendRequestError(BackendError):
    """
    Raised when the request parameters fall outside what the backend accepts.

    Nothing is sent: the payload is rejected while it is being built.
    """
    pass
