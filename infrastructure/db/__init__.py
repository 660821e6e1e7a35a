"""Database infrastructure helpers."""

from __future__ import annotations

from .base import Base, metadata, prepare_database
from .engine import (
    AsyncSessionFactory,
    create_engine,
    dispose_engine,
    get_session_factory,
    session_scope,
)

__all__ = [
    "Base",
    "metadata",
    "prepare_database",
    "AsyncSessionFactory",
    "create_engine",
    "dispose_engine",
    "get_session_factory",
    "session_scope",
]
