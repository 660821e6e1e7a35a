"""Common environment helpers used across the collector."""

from __future__ import annotations

import os

from core.exceptions import ConfigurationError

__all__ = ["get_bool_env", "get_env", "get_float_env", "get_int_env"]

_TRUTHY = {"1", "true", "yes", "on"}


def get_env(key: str, default: str | None = None, *, required: bool = False) -> str | None:
    """Return an environment variable and optionally enforce its presence."""

    value = os.getenv(key, default)
    if required and not value:
        raise ConfigurationError(f"Required environment variable {key} not set", key=key)
    return value


def get_int_env(key: str, default: int) -> int:
    """Return an integer environment variable, failing loudly on garbage."""

    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}", key=key) from exc


def get_float_env(key: str, default: float) -> float:
    """Return a float environment variable, failing loudly on garbage."""

    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}", key=key) from exc


def get_bool_env(key: str, default: bool = False) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY

