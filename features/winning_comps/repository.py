"""Repository for winning comp persistence."""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import delete, text
from sqlalchemy.ext.asyncio import AsyncSession

from features.winning_comps.db_models import WinningCompRecord
from features.winning_comps.schemas import WinningComp

logger = logging.getLogger(__name__)


class WinningCompRepository:
    """Replace-all writer for the ``winning_comps`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def clear(self) -> None:
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            await self.session.execute(
                text(f"TRUNCATE TABLE {WinningCompRecord.__tablename__} RESTART IDENTITY")
            )
        else:
            await self.session.execute(delete(WinningCompRecord))
        logger.info("Truncated %s table", WinningCompRecord.__tablename__)

    async def replace_all(self, comps: Sequence[WinningComp]) -> int:
        """Delete every stored comp and insert ``comps``; caller commits."""

        await self.clear()
        self.session.add_all(
            [
                WinningCompRecord(
                    region=comp.region,
                    player_name=comp.player_name,
                    rank=comp.rank,
                    end_at=comp.end_at,
                    units=[unit.model_dump() for unit in comp.units],
                )
                for comp in comps
            ]
        )
        await self.session.flush()
        logger.info("Inserted %d winning comps", len(comps))
        return len(comps)


__all__ = ["WinningCompRepository"]
