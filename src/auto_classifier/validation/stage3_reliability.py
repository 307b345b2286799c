"""
Stage 3: Reliability gate.

When the model picks among reference labels it also reports a self-assessed
`reliability` in [0, 1]. Answers at or below the threshold are rejected.
When the model proposes new labels (no references) the score carries no
meaning and the gate is skipped entirely.

An explicit `"reliability": null` is rejected like a score of 0. A missing
key or a non-numeric value is logged and let through.
"""

from typing import Optional

import structlog

from auto_classifier.monitoring.metrics import validation_failures_total
from .exceptions import ReliabilityError

logger = structlog.get_logger(__name__)

DEFAULT_RELIABILITY_THRESHOLD = 0.2


def _as_score(value: object) -> Optional[float]:
    """Numeric reliability value, or None when absent or not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


class Stage3Reliability:
    """Stage 3 validator: reject low-reliability answers (references mode only)."""

    def __init__(self, threshold: float = DEFAULT_RELIABILITY_THRESHOLD):
        self.threshold = threshold

    def validate(self, parsed: dict, references_in_use: bool) -> None:
        """
        Raises:
            ReliabilityError: references_in_use and reliability <= threshold
        """
        if not references_in_use:
            return

        if "reliability" in parsed and parsed["reliability"] is None and 0.0 <= self.threshold:
            validation_failures_total.labels(
                stage="reliability", error_type="null_reliability"
            ).inc()
            raise ReliabilityError(score=None, threshold=self.threshold)

        score = _as_score(parsed.get("reliability"))
        if score is None:
            logger.warning(
                "Model response has no numeric reliability, gate not applied",
                reliability=parsed.get("reliability"),
            )
            return

        if score <= self.threshold:
            validation_failures_total.labels(
                stage="reliability", error_type="low_reliability"
            ).inc()
            raise ReliabilityError(score=score, threshold=self.threshold)

        logger.debug("Stage 3: reliability accepted", reliability=score, threshold=self.threshold)
