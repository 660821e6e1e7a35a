"""Observability helpers for emitting structured metrics/events."""

from .metrics import record_batch_completion, track_metric

__all__ = [
    "record_batch_completion",
    "track_metric",
]
