"""Builders for minimal TFT match documents used across tests."""

from __future__ import annotations

from typing import Any, Dict, List


def build_match(
    match_id: str,
    *,
    game_datetime: int = 1_700_000_000_000,
    participants: List[Dict[str, Any]] | None = None,
) -> Dict[str, Any]:
    """Return a minimal TFT match document."""

    return {
        "metadata": {"match_id": match_id},
        "info": {
            "game_datetime": game_datetime,
            "participants": participants or [],
        },
    }


def build_participant(
    puuid: str,
    placement: int,
    *,
    game_name: str | None = None,
    units: List[Dict[str, Any]] | None = None,
) -> Dict[str, Any]:
    participant: Dict[str, Any] = {
        "puuid": puuid,
        "placement": placement,
        "units": units if units is not None else [{"character_id": "TFT_Ahri", "tier": 2}],
    }
    if game_name is not None:
        participant["riotIdGameName"] = game_name
    return participant
