"""Value types used by the flow-restricted batch executor."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Generic, Hashable, List, TypeVar, Union

from core.exceptions import ConfigurationError

K = TypeVar("K", bound=Hashable)
R = TypeVar("R")


@dataclass(frozen=True)
class RateLimit:
    """Maximum number of calls permitted per fixed time window."""

    max_requests: int
    window_ms: int

    def __post_init__(self) -> None:
        if isinstance(self.max_requests, bool) or not isinstance(self.max_requests, int) or self.max_requests <= 0:
            raise ConfigurationError(
                f"max_requests must be a positive integer, got {self.max_requests!r}",
                key="max_requests",
            )
        if isinstance(self.window_ms, bool) or not isinstance(self.window_ms, int) or self.window_ms <= 0:
            raise ConfigurationError(
                f"window_ms must be a positive integer, got {self.window_ms!r}",
                key="window_ms",
            )

    @property
    def window_seconds(self) -> float:
        return self.window_ms / 1000.0

    def effective_ceiling(self, buffer_ratio: float) -> int:
        """Return the per-window call budget after applying ``buffer_ratio``."""

        return effective_ceiling(self, buffer_ratio)


def validate_buffer_ratio(buffer_ratio: float) -> float:
    """Ensure the buffer ratio lies in ``(0, 1]``."""

    try:
        ratio = float(buffer_ratio)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"buffer_ratio must be a number, got {buffer_ratio!r}", key="buffer_ratio"
        ) from exc

    if math.isnan(ratio) or not 0.0 < ratio <= 1.0:
        raise ConfigurationError(
            f"buffer_ratio must be within (0, 1], got {buffer_ratio!r}", key="buffer_ratio"
        )
    return ratio


def effective_ceiling(rate_limit: RateLimit, buffer_ratio: float) -> int:
    """Compute ``floor(max_requests * buffer_ratio)`` and reject values below one."""

    ratio = validate_buffer_ratio(buffer_ratio)
    # decimal product: 100 * 0.29 is 29 here but 28.999... in binary floats
    ceiling = math.floor(Decimal(str(ratio)) * rate_limit.max_requests)
    if ceiling < 1:
        raise ConfigurationError(
            (
                f"Effective ceiling is {ceiling} for max_requests={rate_limit.max_requests} "
                f"and buffer_ratio={ratio}; at least one call per window is required"
            ),
            key="buffer_ratio",
        )
    return ceiling


@dataclass(frozen=True)
class CallSuccess(Generic[K, R]):
    key: K
    payload: R

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class CallFailure(Generic[K]):
    key: K
    error: BaseException

    @property
    def ok(self) -> bool:
        return False

    @property
    def reason(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


CallOutcome = Union[CallSuccess[Any, Any], CallFailure[Any]]


@dataclass
class BatchReport:
    """Outcome of one executor run, in chunk-major, key-minor order."""

    total_keys: int = 0
    outcomes: List[CallOutcome] = field(default_factory=list)
    chunks_planned: int = 0
    chunks_dispatched: int = 0
    cancelled: bool = False
    elapsed_seconds: float = 0.0

    @property
    def results(self) -> List[Any]:
        """Payloads of successful calls only."""

        return [outcome.payload for outcome in self.outcomes if isinstance(outcome, CallSuccess)]

    @property
    def failures(self) -> List[CallFailure[Any]]:
        return [outcome for outcome in self.outcomes if isinstance(outcome, CallFailure)]

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if isinstance(outcome, CallSuccess))

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.succeeded


__all__ = [
    "BatchReport",
    "CallFailure",
    "CallOutcome",
    "CallSuccess",
    "RateLimit",
    "effective_ceiling",
    "validate_buffer_ratio",
]
