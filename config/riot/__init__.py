"""Riot API configuration exports."""

from . import defaults, regions
from .defaults import *  # noqa: F401,F403
from .regions import *  # noqa: F401,F403

__all__ = [
    *defaults.__all__,
    *regions.__all__,
]
