"""Tests for flow control value types."""

import math

import pytest

from core.exceptions import ConfigurationError
from core.flow_control import (
    BatchReport,
    CallFailure,
    CallSuccess,
    RateLimit,
    effective_ceiling,
    validate_buffer_ratio,
)


def test_rate_limit_exposes_window_in_seconds():
    limit = RateLimit(max_requests=100, window_ms=120_000)

    assert limit.window_seconds == 120.0


@pytest.mark.parametrize(
    ("max_requests", "window_ms"),
    [(0, 1000), (-1, 1000), (10, 0), (10, -5), (1.5, 1000), (True, 1000)],
)
def test_rate_limit_rejects_non_positive_values(max_requests, window_ms):
    with pytest.raises(ConfigurationError):
        RateLimit(max_requests=max_requests, window_ms=window_ms)


@pytest.mark.parametrize(
    ("max_requests", "ratio", "expected"),
    [(20, 0.8, 16), (10, 0.85, 8), (100, 0.29, 29), (2, 1.0, 2), (1, 1.0, 1), (3, 0.5, 1)],
)
def test_effective_ceiling_floors_the_buffered_allowance(max_requests, ratio, expected):
    limit = RateLimit(max_requests=max_requests, window_ms=1000)

    assert effective_ceiling(limit, ratio) == expected
    assert limit.effective_ceiling(ratio) == expected


@pytest.mark.parametrize("ratio", [0.5, 1 - 1e-10, 0.9999999999999])
def test_effective_ceiling_below_one_is_a_configuration_error(ratio):
    limit = RateLimit(max_requests=1, window_ms=1000)
    assert math.floor(limit.max_requests * ratio) == 0

    with pytest.raises(ConfigurationError) as excinfo:
        effective_ceiling(limit, ratio)

    assert excinfo.value.key == "buffer_ratio"


def test_effective_ceiling_does_not_round_up_near_integers():
    limit = RateLimit(max_requests=10, window_ms=1000)

    assert effective_ceiling(limit, 0.29999999999) == 2


@pytest.mark.parametrize("ratio", [0, 0.0, -0.1, 1.01, float("nan"), "abc", None])
def test_buffer_ratio_must_be_within_unit_interval(ratio):
    with pytest.raises(ConfigurationError):
        validate_buffer_ratio(ratio)


def test_buffer_ratio_accepts_upper_bound():
    assert validate_buffer_ratio(1) == 1.0


def test_batch_report_separates_successes_from_failures():
    error = RuntimeError("boom")
    report = BatchReport(
        total_keys=3,
        outcomes=[
            CallSuccess(key="a", payload="ra"),
            CallFailure(key="b", error=error),
            CallSuccess(key="c", payload="rc"),
        ],
    )

    assert report.results == ["ra", "rc"]
    assert [failure.key for failure in report.failures] == ["b"]
    assert report.failures[0].reason == "RuntimeError: boom"
    assert report.succeeded == 2
    assert report.failed == 1


def test_empty_report_defaults():
    report = BatchReport()

    assert report.results == []
    assert report.failures == []
    assert report.cancelled is False
