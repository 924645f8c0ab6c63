"""
Check a want-list against an inventory export.

Usage:
    python -m stockcheck.jobs.check_stock stock.csv wants.txt --view picking
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import get_args

from stockcheck.config import settings
from stockcheck.models.failure import KnownError
from stockcheck.models.listing import Language
from stockcheck.parsers.inventory_csv import read_inventory_file
from stockcheck.parsers.wantslist import read_wantslist_file
from stockcheck.services.formatters import RenderView, render
from stockcheck.services.stock_matching import match

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check a want-list against inventory stock")
    parser.add_argument("inventory", help="Cardmarket stock export (CSV)")
    parser.add_argument("wants", help="Want-list file, one '<quantity> <name>' per line")
    parser.add_argument(
        "--view",
        choices=get_args(RenderView),
        default="summary",
        help="Output view (default: summary)",
    )
    parser.add_argument(
        "--language",
        default=settings.default_language,
        help="Only match listings in this language (e.g. German or de)",
    )
    return parser


def run_check(
    inventory_path: str,
    wants_path: str,
    view: RenderView = "summary",
    language: str | None = None,
) -> str:
    """
    Reconcile a want-list file against an inventory file and render it.

    Raises:
        ValueError: If the language is not recognized
        KnownError: If the inventory export is unreadable as a whole
        OSError: If a file cannot be read
    """
    preferred = Language.parse(language) if language else None
    if language and preferred is None:
        raise ValueError(f"Unknown language: {language}")

    inventory = read_inventory_file(inventory_path)
    wants = read_wantslist_file(wants_path)
    results = match(inventory.listings, wants, language=preferred)
    return render(results, view)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        output = run_check(args.inventory, args.wants, args.view, args.language)
    except KnownError as e:
        logger.error("%s %s", e.message, e.detail or "")
        return 1
    except (OSError, ValueError) as e:
        logger.error("Stock check failed: %s", e)
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
