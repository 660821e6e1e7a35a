"""Default configuration values for Riot TFT API access."""

from __future__ import annotations

from core.flow_control.models import RateLimit
from core.utils.env import get_env, get_float_env, get_int_env

RIOT_API_KEY = get_env("RIOT_API_KEY", default="") or ""
"""Developer or production key sent as ``X-Riot-Token``."""

RIOT_REQUEST_TIMEOUT_SECONDS = get_float_env("RIOT_REQUEST_TIMEOUT_SECONDS", 10.0)
"""Per-request HTTP timeout (in seconds)."""

RIOT_API_BASE_URL_TEMPLATE = get_env(
    "RIOT_API_BASE_URL_TEMPLATE", default="https://{host}.api.riotgames.com"
) or "https://{host}.api.riotgames.com"
"""Base URL; ``{host}`` is a platform (jp1) or regional (asia) routing value."""


def _rate_limit(name: str, max_requests: int, window_ms: int) -> RateLimit:
    return RateLimit(
        max_requests=get_int_env(f"RIOT_{name}_MAX_REQUESTS", max_requests),
        window_ms=get_int_env(f"RIOT_{name}_WINDOW_MS", window_ms),
    )


# Development keys allow 20 requests per second and 100 per two minutes.
# Only the match-detail fan-out is batched; league and match-list calls are
# issued one at a time.
MATCH_DETAIL_API_RATE_LIMIT = _rate_limit("MATCH_DETAIL_API", 20, 1000)

REQUEST_BUFFER_RATE = get_float_env("RIOT_REQUEST_BUFFER_RATE", 0.8)
"""Share of the nominal allowance actually used per window."""

TOP_PLAYERS_COUNT = get_int_env("TFT_TOP_PLAYERS_COUNT", 10)
"""Challenger players collected per region."""

RECENT_MATCHES_COUNT = get_int_env("TFT_RECENT_MATCHES_COUNT", 20)
"""Most recent matches inspected per player."""

MATCH_BATCH_TIMEOUT_SECONDS = get_float_env("TFT_MATCH_BATCH_TIMEOUT_SECONDS", 0.0) or None
"""Soft stop for one player's match-detail batch; unset or 0 disables it."""


__all__ = [
    "RIOT_API_KEY",
    "RIOT_REQUEST_TIMEOUT_SECONDS",
    "RIOT_API_BASE_URL_TEMPLATE",
    "MATCH_DETAIL_API_RATE_LIMIT",
    "REQUEST_BUFFER_RATE",
    "TOP_PLAYERS_COUNT",
    "RECENT_MATCHES_COUNT",
    "MATCH_BATCH_TIMEOUT_SECONDS",
]
