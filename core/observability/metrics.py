"""Structured logging helpers for batch fetch observability."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

_logger = logging.getLogger("observability.flow_control")
_metrics_logger = logging.getLogger("observability.metrics")


def _build_payload(**fields: Any) -> Mapping[str, Any]:
    """Return a payload suitable for structured logging handlers."""

    return {
        "event": fields.pop("event"),
        "batch": fields,
    }


def record_batch_completion(
    *,
    label: str,
    total_keys: int,
    succeeded: int,
    failed: int,
    chunks_dispatched: int,
    chunks_planned: int,
    cancelled: bool,
    elapsed_seconds: float,
) -> None:
    """Emit a structured log entry summarising one flow-restricted batch."""

    payload = _build_payload(
        event="flow_control.batch.cancelled" if cancelled else "flow_control.batch.completed",
        label=label,
        total_keys=total_keys,
        succeeded=succeeded,
        failed=failed,
        chunks_dispatched=chunks_dispatched,
        chunks_planned=chunks_planned,
        elapsed_ms=int(elapsed_seconds * 1000),
    )
    level = logging.WARNING if cancelled or failed else logging.DEBUG
    _logger.log(level, "flow_control_batch_finished", extra={"observability": payload})

    tags = {"label": label}
    track_metric("flow_control.calls.succeeded", succeeded, tags=tags)
    track_metric("flow_control.calls.failed", failed, tags=tags)
    track_metric("flow_control.chunks", chunks_dispatched, tags=tags)


def track_metric(name: str, value: float = 1.0, *, tags: Optional[Mapping[str, Any]] = None) -> None:
    """Emit a lightweight metric event for ad-hoc tracking.

    Falls back to structured logging so downstream collectors can ingest the data.
    """

    payload = {
        "event": "metric",
        "metric": name,
        "value": value,
        "tags": dict(tags or {}),
    }
    _metrics_logger.debug("metric_event", extra={"observability": payload})


__all__ = [
    "record_batch_completion",
    "track_metric",
]
