"""Custom Prometheus metrics for Auto Classifier.

The host application decides whether and how to expose the default registry.
Useful signals:
- classifications_total (failure rate per engine and error type)
- validation_failures_total (model drifting away from the JSON answer format)
- backend_latency_seconds (slow backends block the user's command)
"""

from prometheus_client import Counter, Histogram

# === Classification Metrics ===

classifications_total = Counter(
    "auto_classifier_classifications_total",
    "Total classify invocations by engine and outcome",
    ["engine", "outcome"],
)
"""
Classify invocations by engine and outcome.

Labels:
- engine: generative, zero_shot
- outcome: success, or the failing error class (CredentialMissingError, ...)
"""

labels_placed_total = Counter(
    "auto_classifier_labels_placed_total",
    "Total labels written into notes by output kind",
    ["output_kind"],
)

# === Validation Metrics ===

validation_failures_total = Counter(
    "auto_classifier_validation_failures_total",
    "Total generative response validation failures by stage and error type",
    ["stage", "error_type"],
)
"""
Labels:
- stage: parse (JSON / outputs shape), reliability (reliability gate)
- error_type: empty_content, json_decode_error, not_json_object,
  outputs_not_array, low_reliability
"""

# === Backend Metrics ===

backend_latency_seconds = Histogram(
    "auto_classifier_backend_latency_seconds",
    "Backend call latency in seconds",
    ["engine", "success"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0),
)

backend_tokens_total = Counter(
    "auto_classifier_backend_tokens_total",
    "Total tokens reported by backends",
    ["engine"],
)

# === Filename Suggestion Metrics ===

filename_suggestions_total = Counter(
    "auto_classifier_filename_suggestions_total",
    "Total filename suggestion invocations by outcome",
    ["outcome"],
)
