"""Pure helpers that pull winning boards out of raw match documents."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from features.winning_comps.schemas import UnitSummary, WinningComp

logger = logging.getLogger(__name__)

UNKNOWN_PLAYER = "Unknown"


def find_participant(match: Mapping[str, Any], puuid: str) -> Optional[Mapping[str, Any]]:
    """Return the participant entry of ``puuid`` in ``match``, if present."""

    info = match.get("info") or {}
    for participant in info.get("participants") or []:
        if participant.get("puuid") == puuid:
            return participant
    return None


def extract_player_name(matches: Sequence[Mapping[str, Any]], puuid: str) -> str:
    """Read the Riot ID game name from the player's first fetched match."""

    if not matches:
        return UNKNOWN_PLAYER

    participant = find_participant(matches[0], puuid)
    if participant is None:
        return UNKNOWN_PLAYER
    return participant.get("riotIdGameName") or UNKNOWN_PLAYER


def _game_end(info: Mapping[str, Any]) -> datetime:
    # game_datetime is epoch milliseconds
    return datetime.fromtimestamp(int(info["game_datetime"]) / 1000, tz=timezone.utc)


def extract_winning_comps(
    matches: Iterable[Mapping[str, Any]],
    puuid: str,
    *,
    region: str,
    rank: int,
    player_name: str,
) -> List[WinningComp]:
    """Return one comp per match in which the player placed first."""

    comps: List[WinningComp] = []
    for match in matches:
        participant = find_participant(match, puuid)
        if participant is None or participant.get("placement") != 1:
            continue

        try:
            comps.append(
                WinningComp(
                    region=region,
                    player_name=player_name,
                    rank=rank,
                    end_at=_game_end(match["info"]),
                    units=[
                        UnitSummary(character_id=unit["character_id"], tier=unit["tier"])
                        for unit in participant.get("units") or []
                    ],
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            match_id = (match.get("metadata") or {}).get("match_id")
            logger.warning("Skipping malformed match %s: %s", match_id, exc)
    return comps


__all__ = ["UNKNOWN_PLAYER", "extract_player_name", "extract_winning_comps", "find_participant"]
