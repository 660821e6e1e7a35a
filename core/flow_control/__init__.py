"""Rate-limited batch fetching for quota-restricted remote APIs."""

from .executor import FlowRestrictedExecutor, batch_get_with_flow_restriction, chunked
from .models import (
    BatchReport,
    CallFailure,
    CallOutcome,
    CallSuccess,
    RateLimit,
    effective_ceiling,
    validate_buffer_ratio,
)

__all__ = [
    "BatchReport",
    "CallFailure",
    "CallOutcome",
    "CallSuccess",
    "FlowRestrictedExecutor",
    "RateLimit",
    "batch_get_with_flow_restriction",
    "chunked",
    "effective_ceiling",
    "validate_buffer_ratio",
]
