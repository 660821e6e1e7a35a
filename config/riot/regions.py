"""Platform and regional routing values for the TFT endpoints."""

from __future__ import annotations

import os
from enum import Enum
from typing import Dict, List, Optional

from core.exceptions import ConfigurationError


class Region(str, Enum):
    """Platform routing values (league endpoints are served per platform)."""

    JAPAN = "jp1"
    KOREA = "kr"
    NORTH_AMERICA = "na1"
    EU_WEST = "euw1"
    EU_EAST = "eun1"
    BRAZIL = "br1"
    LATIN_AMERICA_NORTH = "la1"
    LATIN_AMERICA_SOUTH = "la2"
    OCEANIA = "oc1"
    TURKEY = "tr1"
    VIETNAM = "vn2"
    RUSSIA = "ru"
    PHILIPPINES = "ph2"
    SINGAPORE = "sg2"
    THAILAND = "th2"
    TAIWAN = "tw2"


class RegionGroup(str, Enum):
    """Regional routing values (match endpoints are served per region group)."""

    AMERICAS = "americas"
    ASIA = "asia"
    EUROPE = "europe"
    SEA = "sea"


REGION_TO_PLATFORM: Dict[Region, RegionGroup] = {
    Region.JAPAN: RegionGroup.ASIA,
    Region.KOREA: RegionGroup.ASIA,
    Region.NORTH_AMERICA: RegionGroup.AMERICAS,
    Region.BRAZIL: RegionGroup.AMERICAS,
    Region.LATIN_AMERICA_NORTH: RegionGroup.AMERICAS,
    Region.LATIN_AMERICA_SOUTH: RegionGroup.AMERICAS,
    Region.EU_WEST: RegionGroup.EUROPE,
    Region.EU_EAST: RegionGroup.EUROPE,
    Region.TURKEY: RegionGroup.EUROPE,
    Region.RUSSIA: RegionGroup.EUROPE,
    Region.OCEANIA: RegionGroup.SEA,
    Region.VIETNAM: RegionGroup.SEA,
    Region.PHILIPPINES: RegionGroup.SEA,
    Region.SINGAPORE: RegionGroup.SEA,
    Region.THAILAND: RegionGroup.SEA,
    Region.TAIWAN: RegionGroup.SEA,
}

DEFAULT_TARGET_REGIONS: List[Region] = [
    Region.JAPAN,
    Region.KOREA,
    Region.NORTH_AMERICA,
    Region.EU_WEST,
    Region.EU_EAST,
    Region.BRAZIL,
    Region.LATIN_AMERICA_NORTH,
    Region.LATIN_AMERICA_SOUTH,
    Region.OCEANIA,
    Region.TURKEY,
    Region.VIETNAM,
]


def parse_regions(raw: Optional[str]) -> List[Region]:
    """Parse a comma-separated list of platform values, keeping order."""

    if raw is None or not raw.strip():
        return list(DEFAULT_TARGET_REGIONS)

    regions: List[Region] = []
    for token in raw.split(","):
        value = token.strip().lower()
        if not value:
            continue
        try:
            region = Region(value)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown region: {value}", key="TFT_TARGET_REGIONS") from exc
        if region not in regions:
            regions.append(region)

    if not regions:
        raise ConfigurationError("No target regions configured", key="TFT_TARGET_REGIONS")
    return regions


def region_group_for(region: Region) -> RegionGroup:
    return REGION_TO_PLATFORM[region]


TARGET_REGIONS: List[Region] = parse_regions(os.getenv("TFT_TARGET_REGIONS"))

__all__ = [
    "DEFAULT_TARGET_REGIONS",
    "REGION_TO_PLATFORM",
    "Region",
    "RegionGroup",
    "TARGET_REGIONS",
    "parse_regions",
    "region_group_for",
]
