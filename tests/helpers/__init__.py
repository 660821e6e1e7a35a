"""Shared test helpers."""

from .matches import build_match, build_participant

__all__ = ["build_match", "build_participant"]
