"""
Orchestration exceptions: precondition gates and outcome failures.

Precondition errors are raised before any network call or document write.
"""

from auto_classifier.exceptions import AutoClassifierError


class PreconditionError(AutoClassifierError):
    """Base exception for fail-fast gates checked before the backend call."""
    pass


class CredentialMissingError(PreconditionError):
    """The selected engine needs an API key and none is configured."""
    pass


class ReferenceMissingError(PreconditionError):
    """References mode is on (or the engine needs candidates) but no labels are configured."""
    pass


class ReferenceCountExceededError(PreconditionError):
    """
    More reference labels than the zero-shot backend accepts.

    Labels are never truncated: the user must fix the configuration.
    """

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(
            f"Jina AI supports maximum {limit} reference tags, but {count} were provided. "
            "Please reduce the number of tags.",
            details={"count": count, "limit": limit},
        )


class InvalidSettingsError(PreconditionError):
    """A setting changed after load holds a value the engine cannot use."""
    pass


class InputMissingError(PreconditionError):
    """The requested input source returned no text."""
    pass


class NoLabelsProducedError(AutoClassifierError):
    """Validation/ranking/truncation left no label to place."""
    pass


class PlacementError(AutoClassifierError):
    """
    The host failed while writing a label.

    Labels placed before the failure stay in the document; the remaining
    labels are skipped.
    """
    pass


class UnsupportedOperationError(AutoClassifierError):
    """The selected engine cannot perform the requested operation."""
    pass


class NoFilenameSuggestionError(AutoClassifierError):
    """The model's answer was empty after sanitization."""
    pass
