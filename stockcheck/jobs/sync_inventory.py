"""
Load an inventory export into the snapshot store.

Run this job after each stock export to keep the stored snapshot current.
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from stockcheck.db.database import init_db, session_scope
from stockcheck.db.operations import replace_snapshot_listings
from stockcheck.models.failure import KnownError
from stockcheck.parsers.inventory_csv import read_inventory_file

logger = logging.getLogger(__name__)


async def run_sync(inventory_path: str, snapshot_name: str) -> int:
    """
    Replace a snapshot with the listings of an export file.

    Returns:
        Number of listings stored
    """
    result = read_inventory_file(inventory_path)

    await init_db()
    async with session_scope() as session:
        await replace_snapshot_listings(session, snapshot_name, result.listings)

    logger.info(
        "Synced %d listings into snapshot %s (skipped %d rows)",
        len(result.listings),
        snapshot_name,
        result.skipped_rows,
    )
    return len(result.listings)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = argparse.ArgumentParser(description="Sync an inventory export into the database")
    parser.add_argument("inventory", help="Cardmarket stock export (CSV)")
    parser.add_argument("--snapshot", default="default", help="Snapshot name (default: default)")
    args = parser.parse_args(argv)

    try:
        asyncio.run(run_sync(args.inventory, args.snapshot))
    except KnownError as e:
        logger.error("%s %s", e.message, e.detail or "")
        return 1
    except OSError as e:
        logger.error("Failed to read inventory: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
