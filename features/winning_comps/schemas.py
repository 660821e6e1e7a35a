"""Pydantic schemas for the winning comps feature."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UnitSummary(BaseModel):
    """A single champion on the final board."""

    character_id: str
    tier: int


class LeagueEntry(BaseModel):
    """Challenger ladder entry as returned by the league endpoint."""

    puuid: str
    summoner_name: Optional[str] = Field(default=None, alias="summonerName")
    league_points: int = Field(default=0, alias="leaguePoints")
    rank: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WinningComp(BaseModel):
    """A first-place board of a top player."""

    region: str
    player_name: str
    rank: int = Field(..., ge=1, description="Position on the challenger ladder")
    end_at: datetime
    units: List[UnitSummary] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class PlayerWinningComps(BaseModel):
    """Winning comps found in one player's recent matches."""

    comps: List[WinningComp] = Field(default_factory=list)
    player_name: str = "Unknown"


__all__ = ["LeagueEntry", "PlayerWinningComps", "UnitSummary", "WinningComp"]
