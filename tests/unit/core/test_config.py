"""Tests for configuration helpers."""

import importlib

import pytest

from config.riot import defaults as riot_defaults
from config.riot.regions import (
    DEFAULT_TARGET_REGIONS,
    REGION_TO_PLATFORM,
    Region,
    RegionGroup,
    parse_regions,
    region_group_for,
)
from core.exceptions import ConfigurationError
from core.utils.config_helpers import normalise_async_url
from core.utils.env import get_bool_env, get_env, get_float_env, get_int_env


def test_get_env_returns_default(monkeypatch):
    """get_env should return provided default when variable missing."""

    monkeypatch.delenv("NON_EXISTENT", raising=False)
    assert get_env("NON_EXISTENT", default="value") == "value"


def test_get_env_required(monkeypatch):
    """get_env should raise when required env missing or empty."""

    monkeypatch.delenv("REQUIRED_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        get_env("REQUIRED_KEY", required=True)

    monkeypatch.setenv("REQUIRED_KEY", "")
    with pytest.raises(ConfigurationError):
        get_env("REQUIRED_KEY", required=True)


def test_numeric_env_helpers(monkeypatch):
    monkeypatch.setenv("SOME_INT", " 42 ")
    monkeypatch.setenv("SOME_FLOAT", "0.75")
    monkeypatch.delenv("MISSING_NUMBER", raising=False)

    assert get_int_env("SOME_INT", 1) == 42
    assert get_float_env("SOME_FLOAT", 1.0) == 0.75
    assert get_int_env("MISSING_NUMBER", 7) == 7

    monkeypatch.setenv("SOME_INT", "forty-two")
    with pytest.raises(ConfigurationError) as excinfo:
        get_int_env("SOME_INT", 1)
    assert excinfo.value.key == "SOME_INT"


def test_bool_env_helper(monkeypatch):
    monkeypatch.setenv("FLAG", "Yes")
    assert get_bool_env("FLAG") is True
    monkeypatch.setenv("FLAG", "off")
    assert get_bool_env("FLAG", True) is False
    monkeypatch.delenv("FLAG")
    assert get_bool_env("FLAG", True) is True


def test_riot_rate_limits_can_be_overridden(monkeypatch):
    monkeypatch.setenv("RIOT_MATCH_DETAIL_API_MAX_REQUESTS", "100")
    monkeypatch.setenv("RIOT_MATCH_DETAIL_API_WINDOW_MS", "120000")
    monkeypatch.setenv("RIOT_REQUEST_BUFFER_RATE", "0.5")

    reloaded = importlib.reload(riot_defaults)
    try:
        assert reloaded.MATCH_DETAIL_API_RATE_LIMIT.max_requests == 100
        assert reloaded.MATCH_DETAIL_API_RATE_LIMIT.window_ms == 120000
        assert reloaded.REQUEST_BUFFER_RATE == 0.5
    finally:
        monkeypatch.undo()
        importlib.reload(riot_defaults)


def test_riot_defaults(monkeypatch):
    for name in (
        "RIOT_MATCH_DETAIL_API_MAX_REQUESTS",
        "RIOT_MATCH_DETAIL_API_WINDOW_MS",
        "RIOT_REQUEST_BUFFER_RATE",
        "TFT_TOP_PLAYERS_COUNT",
        "TFT_RECENT_MATCHES_COUNT",
        "TFT_MATCH_BATCH_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)

    reloaded = importlib.reload(riot_defaults)

    assert reloaded.MATCH_DETAIL_API_RATE_LIMIT.max_requests == 20
    assert reloaded.MATCH_DETAIL_API_RATE_LIMIT.window_ms == 1000
    assert reloaded.REQUEST_BUFFER_RATE == 0.8
    assert reloaded.TOP_PLAYERS_COUNT == 10
    assert reloaded.RECENT_MATCHES_COUNT == 20
    assert reloaded.MATCH_BATCH_TIMEOUT_SECONDS is None
    assert [name for name in reloaded.__all__ if name.endswith("_RATE_LIMIT")] == [
        "MATCH_DETAIL_API_RATE_LIMIT"
    ]
    assert all(hasattr(reloaded, name) for name in reloaded.__all__)


def test_every_region_has_a_routing_group():
    assert set(REGION_TO_PLATFORM) == set(Region)
    assert region_group_for(Region.JAPAN) is RegionGroup.ASIA
    assert region_group_for(Region.EU_EAST) is RegionGroup.EUROPE
    assert region_group_for(Region.VIETNAM) is RegionGroup.SEA


def test_parse_regions_defaults_and_order():
    assert parse_regions(None) == DEFAULT_TARGET_REGIONS
    assert parse_regions("  ") == DEFAULT_TARGET_REGIONS
    assert parse_regions("KR, jp1,kr") == [Region.KOREA, Region.JAPAN]


@pytest.mark.parametrize("raw", ["atlantis", ",,"])
def test_parse_regions_rejects_invalid_values(raw):
    with pytest.raises(ConfigurationError):
        parse_regions(raw)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("postgres://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
        ("postgresql://u:p@h:5432/db", "postgresql+asyncpg://u:p@h:5432/db"),
        ("postgresql+asyncpg://u@h/db", "postgresql+asyncpg://u@h/db"),
        ("sqlite:///tmp/comps.db", "sqlite+aiosqlite:///tmp/comps.db"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalise_async_url(raw, expected):
    assert normalise_async_url(raw) == expected
