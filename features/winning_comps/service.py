"""Service layer collecting first-place boards of challenger players."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncEngine

from config.riot.defaults import (
    MATCH_BATCH_TIMEOUT_SECONDS,
    MATCH_DETAIL_API_RATE_LIMIT,
    RECENT_MATCHES_COUNT,
    REQUEST_BUFFER_RATE,
    TOP_PLAYERS_COUNT,
)
from config.riot.regions import TARGET_REGIONS, Region, region_group_for
from core.clients.riot import RiotTftClient
from core.exceptions import ServiceError
from core.flow_control import FlowRestrictedExecutor, RateLimit
from features.winning_comps.extraction import (
    UNKNOWN_PLAYER,
    extract_player_name,
    extract_winning_comps,
)
from features.winning_comps.repository import WinningCompRepository
from features.winning_comps.schemas import LeagueEntry, PlayerWinningComps, WinningComp
from infrastructure.db import get_session_factory, prepare_database, session_scope

logger = logging.getLogger(__name__)


def _cancelled(cancel_event: Optional[asyncio.Event]) -> bool:
    return cancel_event is not None and cancel_event.is_set()


class WinningCompsCollector:
    """Walks regions, top players and their recent matches."""

    def __init__(
        self,
        client: RiotTftClient,
        *,
        top_players_count: int = TOP_PLAYERS_COUNT,
        recent_matches_count: int = RECENT_MATCHES_COUNT,
        match_rate_limit: RateLimit = MATCH_DETAIL_API_RATE_LIMIT,
        buffer_ratio: float = REQUEST_BUFFER_RATE,
        batch_timeout: Optional[float] = MATCH_BATCH_TIMEOUT_SECONDS,
        executor: Optional[FlowRestrictedExecutor] = None,
    ) -> None:
        self.client = client
        self.top_players_count = top_players_count
        self.recent_matches_count = recent_matches_count
        self.batch_timeout = batch_timeout
        self.match_executor = executor or FlowRestrictedExecutor(
            match_rate_limit,
            buffer_ratio,
            label="match_details",
        )

    async def fetch_top_challengers(self, region: Region, count: int) -> List[LeagueEntry]:
        """Return the ``count`` challenger entries with the most league points."""

        league = await self.client.get_challenger_league(region)
        entries = [LeagueEntry.model_validate(entry) for entry in league.get("entries") or []]
        entries.sort(key=lambda entry: entry.league_points, reverse=True)
        return entries[:count]

    async def fetch_winning_matches(
        self,
        puuid: str,
        region: Region,
        rank: int,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> PlayerWinningComps:
        """Fetch recent matches of one player and keep the first-place boards."""

        region_group = region_group_for(region)
        if _cancelled(cancel_event):
            return PlayerWinningComps(player_name=UNKNOWN_PLAYER)

        try:
            match_ids = await self.client.list_match_ids(
                puuid, region_group, count=self.recent_matches_count
            )
        except ServiceError as exc:
            logger.warning("  Failed to fetch match list: %s", exc)
            return PlayerWinningComps(player_name=UNKNOWN_PLAYER)

        if not match_ids:
            return PlayerWinningComps(player_name=UNKNOWN_PLAYER)

        matches: List[Any] = await self.match_executor.execute(
            self.client.get_match,
            match_ids,
            (region_group,),
            cancel_event=cancel_event,
            timeout=self.batch_timeout,
        )

        player_name = extract_player_name(matches, puuid)
        comps = extract_winning_comps(
            matches,
            puuid,
            region=region.value,
            rank=rank,
            player_name=player_name,
        )
        return PlayerWinningComps(comps=comps, player_name=player_name)

    async def collect(
        self,
        regions: Iterable[Region] = TARGET_REGIONS,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[WinningComp]:
        """Collect winning comps across ``regions``; a failing region is skipped."""

        all_comps: List[WinningComp] = []

        for region in regions:
            if _cancelled(cancel_event):
                logger.warning("Collection cancelled before %s", region.value)
                break

            logger.info("Processing %s...", region.value)
            try:
                top_players = await self.fetch_top_challengers(region, self.top_players_count)
                logger.info("  Found %d top challengers", len(top_players))

                for index, player in enumerate(top_players):
                    if _cancelled(cancel_event):
                        logger.warning(
                            "Collection cancelled in %s after %d of %d players",
                            region.value,
                            index,
                            len(top_players),
                        )
                        break
                    rank = index + 1
                    result = await self.fetch_winning_matches(
                        player.puuid, region, rank, cancel_event=cancel_event
                    )
                    all_comps.extend(result.comps)
                    logger.info(
                        "  [%d] %s (%d LP) - %d wins",
                        rank,
                        result.player_name,
                        player.league_points,
                        len(result.comps),
                    )
            except Exception as exc:
                logger.error("Error processing %s: %s", region.value, exc, exc_info=True)

        logger.info("Total winning comps collected: %d", len(all_comps))
        return all_comps


async def save_winning_comps(
    comps: Sequence[WinningComp],
    engine: AsyncEngine,
    *,
    create_tables: bool = False,
) -> int:
    """Replace the stored comps with ``comps`` in a single transaction."""

    if create_tables:
        await prepare_database(engine)

    async with session_scope(get_session_factory(engine)) as session:
        inserted = await WinningCompRepository(session).replace_all(comps)
    return inserted


__all__ = ["WinningCompsCollector", "save_winning_comps"]
