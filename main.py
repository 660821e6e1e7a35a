"""TFT Winning Comps Collector - command entry point.

Collects first-place boards of the top challenger players in each target
region and replaces the ``winning_comps`` table with them.

Flow:
    1. Read the challenger ladder of every region (sorted by LP)
    2. List each top player's recent match ids
    3. Fetch match details through the flow-restricted executor
    4. Keep boards where the player placed first
    5. TRUNCATE + INSERT into PostgreSQL (skipped with --dry-run)

Usage:
    python main.py [--regions jp1,kr] [--dry-run] [--create-tables]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Sequence

from config.riot.regions import TARGET_REGIONS, Region, parse_regions
from core.clients.riot import RiotTftClient
from core.exceptions import ServiceError
from core.logging import setup_logging
from features.winning_comps.schemas import WinningComp
from features.winning_comps.service import WinningCompsCollector, save_winning_comps
from infrastructure.db import create_engine, dispose_engine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Collect TFT winning comps from top challengers.")
    parser.add_argument(
        "--regions",
        default=None,
        help="Comma-separated platform ids (e.g. jp1,kr,euw1). Defaults to TFT_TARGET_REGIONS.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Collect only; do not touch the database.",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create the winning_comps table if it does not exist.",
    )
    return parser


async def collect_winning_comps(regions: Sequence[Region]) -> List[WinningComp]:
    """Collect winning comps from every region with a fresh API client."""

    async with RiotTftClient() as client:
        return await WinningCompsCollector(client).collect(regions)


async def run(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    regions = parse_regions(args.regions) if args.regions else list(TARGET_REGIONS)

    logger.info("Starting winning comps collection...")
    comps = await collect_winning_comps(regions)

    if args.dry_run:
        logger.info("Dry run: skipping database write of %d comps", len(comps))
    else:
        engine = create_engine()
        try:
            await save_winning_comps(comps, engine, create_tables=args.create_tables)
        finally:
            await dispose_engine(engine)

    logger.info("Done!")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_logging()
    try:
        return asyncio.run(run(argv))
    except ServiceError as exc:
        logger.error("Fatal error: %s", exc, exc_info=True)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
