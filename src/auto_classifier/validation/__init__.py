"""
Response validation and label ranking.

- pipeline.py: ResponseValidator running all generative stages
- stage1_json_parse.py: Code-fence stripping + JSON parsing (hard fail)
- stage2_outputs.py: `outputs` array check (hard fail)
- stage3_reliability.py: Reliability gate, references mode only (hard fail)
- ranking.py: Zero-shot label ranking (stable, descending score)
"""

from .exceptions import (
    ResponseValidationError,
    ResponseParseError,
    ReliabilityError,
)
from .pipeline import ResponseValidator
from .ranking import rank_labels

__all__ = [
    "ResponseValidator",
    "rank_labels",
    "ResponseValidationError",
    "ResponseParseError",
    "ReliabilityError",
]
