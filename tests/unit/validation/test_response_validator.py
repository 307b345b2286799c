"""
Unit tests for the ResponseValidator (all stages) and zero-shot ranking.
"""

import pytest

from auto_classifier.models.llm_models import ZeroShotPrediction
from auto_classifier.validation import (
    ReliabilityError,
    ResponseParseError,
    ResponseValidator,
    rank_labels,
)


class TestResponseValidator:
    """Test suite for the generative response validator."""

    def setup_method(self):
        self.validator = ResponseValidator(reliability_threshold=0.2)

    def test_fenced_answer_with_references(self):
        raw = '```json\n{"reliability": 0.85, "outputs": ["animals", "pets"]}\n```'

        assert self.validator.validate(raw, references_in_use=True) == ["animals", "pets"]

    def test_low_reliability_rejected_with_references(self):
        raw = '{"reliability": 0.1, "outputs": ["animals"]}'

        with pytest.raises(ReliabilityError):
            self.validator.validate(raw, references_in_use=True)

    def test_low_reliability_accepted_without_references(self):
        raw = '{"reliability": 0.1, "outputs": ["new-tag"]}'

        assert self.validator.validate(raw, references_in_use=False) == ["new-tag"]

    def test_parse_error_before_reliability(self):
        """A malformed answer is a parse error even in references mode."""
        with pytest.raises(ResponseParseError):
            self.validator.validate('{"reliability": 0.9, "outputs": "x"}', references_in_use=True)

    def test_model_order_preserved(self):
        raw = '{"reliability": 0.9, "outputs": ["z", "a", "m"]}'

        assert self.validator.validate(raw, references_in_use=True) == ["z", "a", "m"]


class TestRankLabels:
    """Test suite for zero-shot label ranking."""

    @staticmethod
    def _predictions(*pairs):
        return [ZeroShotPrediction(label=label, score=score) for label, score in pairs]

    def test_descending_score(self):
        predictions = self._predictions(("neutral", 0.1), ("positive", 0.8), ("negative", 0.1))

        assert rank_labels(predictions)[0] == "positive"

    def test_ties_keep_backend_order(self):
        predictions = self._predictions(("A", 0.9), ("B", 0.9), ("C", 0.3))

        assert rank_labels(predictions) == ["A", "B", "C"]

    def test_ties_keep_backend_order_reversed_input(self):
        predictions = self._predictions(("C", 0.3), ("B", 0.9), ("A", 0.9))

        assert rank_labels(predictions) == ["B", "A", "C"]

    def test_ranking_is_idempotent(self):
        predictions = self._predictions(("x", 0.2), ("y", 0.7), ("z", 0.7), ("w", 0.5))
        ranked_once = rank_labels(predictions)

        scores = {p.label: p.score for p in predictions}
        reordered = self._predictions(*[(label, scores[label]) for label in ranked_once])

        assert rank_labels(reordered) == ranked_once

    def test_empty_predictions(self):
        assert rank_labels([]) == []
