"""
Report storage bins with free slots.

Usage:
    python -m stockcheck.jobs.bin_report stock.csv --min-free 10 --sort location
"""

import argparse
import logging
import sys
from collections.abc import Sequence

from stockcheck.config import settings
from stockcheck.models.failure import KnownError
from stockcheck.parsers.inventory_csv import read_inventory_file
from stockcheck.services.stock_analysis import analyze_bins, format_bin_analysis

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = argparse.ArgumentParser(description="Find storage bins with free slots")
    parser.add_argument("inventory", help="Cardmarket stock export (CSV)")
    parser.add_argument("--min-free", type=int, default=1, help="Minimum free slots per bin")
    parser.add_argument(
        "--sort",
        choices=("free_slots", "location"),
        default="free_slots",
        help="Sort order (default: free_slots)",
    )
    args = parser.parse_args(argv)

    try:
        inventory = read_inventory_file(args.inventory)
    except KnownError as e:
        logger.error("%s %s", e.message, e.detail or "")
        return 1
    except OSError as e:
        logger.error("Failed to read inventory: %s", e)
        return 1

    analysis = analyze_bins(inventory.listings, args.min_free, capacity=settings.bin_capacity)
    sys.stdout.write(format_bin_analysis(analysis, args.sort))
    return 0


if __name__ == "__main__":
    sys.exit(main())
