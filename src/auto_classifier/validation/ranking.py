"""
Label ranking for zero-shot predictions.

Orders label/score pairs best-first. Python's sort is stable, so labels with
equal scores keep the order the backend returned them in.
"""

from typing import Sequence

from auto_classifier.models.llm_models import ZeroShotPrediction


def rank_labels(predictions: Sequence[ZeroShotPrediction]) -> list[str]:
    """
    Rank predictions by descending score.

    Examples:
        [A:0.9, B:0.9, C:0.3] -> [A, B, C]
        [C:0.3, A:0.9]        -> [A, C]
    """
    ranked = sorted(predictions, key=lambda prediction: prediction.score, reverse=True)
    return [prediction.label for prediction in ranked]
