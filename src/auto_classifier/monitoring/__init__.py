"""Monitoring and metrics instrumentation for Auto Classifier.

Exports custom Prometheus metrics for operational monitoring.
"""

from auto_classifier.monitoring.metrics import (
    backend_latency_seconds,
    backend_tokens_total,
    classifications_total,
    filename_suggestions_total,
    labels_placed_total,
    validation_failures_total,
)

__all__ = [
    "classifications_total",
    "labels_placed_total",
    "validation_failures_total",
    "backend_latency_seconds",
    "backend_tokens_total",
    "filename_suggestions_total",
]
