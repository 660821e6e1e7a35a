"""Database connection pool configuration."""

from __future__ import annotations

from core.utils.env import get_bool_env, get_int_env

POOL_SIZE = get_int_env("DB_POOL_SIZE", 5)
MAX_OVERFLOW = get_int_env("DB_MAX_OVERFLOW", 5)
POOL_RECYCLE = get_int_env("DB_POOL_RECYCLE", 900)
COMMAND_TIMEOUT = get_int_env("DB_COMMAND_TIMEOUT", 10)
ECHO = get_bool_env("DB_ECHO", False)

__all__ = [
    "POOL_SIZE",
    "MAX_OVERFLOW",
    "POOL_RECYCLE",
    "COMMAND_TIMEOUT",
    "ECHO",
]
