"""Test configuration helpers."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List

import pytest

# Explicitly opt-in to the async plugin we rely on, even when plugin
# auto-discovery is disabled via ``PYTEST_DISABLE_PLUGIN_AUTOLOAD``.
pytest_plugins = ("pytest_asyncio",)

# Ensure the repository root is importable so that ``import core`` and the
# other flat top-level packages resolve from any working directory.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("RIOT_API_KEY", "test-riot-key")


class RecordingSleep:
    """Stand-in for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
