"""
Unit tests for Stage 2: outputs shape.
"""

import pytest

from auto_classifier.validation.stage2_outputs import Stage2Outputs
from auto_classifier.validation.exceptions import ResponseParseError


class TestStage2Outputs:
    """Test suite for the `outputs` array check."""

    def setup_method(self):
        self.stage2 = Stage2Outputs()

    def test_outputs_returned_in_model_order(self):
        result = self.stage2.validate({"reliability": 0.9, "outputs": ["b", "a", "c"]})

        assert result == ["b", "a", "c"]

    def test_empty_outputs_is_valid(self):
        """An empty array is well-formed; the orchestrator decides what to do with it."""
        assert self.stage2.validate({"outputs": []}) == []

    def test_missing_outputs_raises_error(self):
        with pytest.raises(ResponseParseError) as exc_info:
            self.stage2.validate({"reliability": 0.9})

        assert exc_info.value.message == "Output format error (expected array)"

    def test_string_outputs_raises_error(self):
        with pytest.raises(ResponseParseError) as exc_info:
            self.stage2.validate({"reliability": 0.9, "outputs": "animals"})

        assert exc_info.value.message == "Output format error (expected array)"
        assert exc_info.value.details["parse_error"] == "outputs is str"

    def test_object_outputs_raises_error(self):
        with pytest.raises(ResponseParseError):
            self.stage2.validate({"outputs": {"tag": "animals"}})

    def test_non_string_items_raise_error(self):
        with pytest.raises(ResponseParseError) as exc_info:
            self.stage2.validate({"outputs": ["animals", 3, None]})

        assert "array of strings" in exc_info.value.message
        assert "2 non-string" in exc_info.value.details["parse_error"]
