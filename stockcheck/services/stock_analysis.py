"""
Storage bin analysis.

Locations look like "A-0-1-4" with an optional slot suffix ("A-0-1-4-L0",
"A-0-1-4-R"). The first four parts name a bin of fixed capacity; this module
finds bins with room for new stock.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from stockcheck.config import DEFAULT_BIN_CAPACITY
from stockcheck.models.listing import InventoryListing

logger = logging.getLogger(__name__)

BinSortOrder = Literal["free_slots", "location"]


@dataclass(frozen=True, slots=True)
class BinUsage:
    """Fill level of one storage bin."""

    location: str
    cards: int
    capacity: int

    @property
    def free_slots(self) -> int:
        return self.capacity - self.cards


@dataclass
class BinAnalysis:
    """Bins that still have at least `min_free_slots` free."""

    capacity: int
    min_free_slots: int
    bins: list[BinUsage] = field(default_factory=list)


def extract_bin_location(location: str | None) -> str | None:
    """
    Reduce a storage location to its bin ("A-0-1-4-L0" -> "A-0-1-4").

    Returns None unless the location has at least four parts and the fourth
    is an integer.
    """
    if not location or not location.strip():
        return None
    parts = location.strip().split("-")
    if len(parts) < 4:
        return None
    try:
        int(parts[3])
    except ValueError:
        return None
    return "-".join(parts[:4])


def location_sort_key(location: str | None) -> tuple[int, tuple[int, ...]]:
    """
    Sort key for storage locations in physical walking order.

    The shelf letter maps A..D to 1..4 (anything else 0) and the remaining
    parts compare numerically, so "A-0-1-2" < "A-0-1-10" < "B-0-0-1".
    Blank locations sort after all others.
    """
    if not location or not location.strip():
        return (1, ())

    main_part = location.strip().split("-L0")[0]
    key: list[int] = []
    for index, part in enumerate(main_part.split("-")):
        if index == 0:
            key.append({"A": 1, "B": 2, "C": 3, "D": 4}.get(part[:1].upper(), 0))
            continue
        try:
            key.append(int(part))
        except ValueError:
            key.append(0)
    return (0, tuple(key))


def analyze_bins(
    inventory: Sequence[InventoryListing],
    min_free_slots: int,
    capacity: int = DEFAULT_BIN_CAPACITY,
) -> BinAnalysis:
    """
    Sum stock per bin and keep bins with enough free slots.

    Listings without a parseable bin location are ignored. Bins are returned
    in location order.
    """
    counts: dict[str, int] = {}
    for listing in inventory:
        bin_location = extract_bin_location(listing.location)
        if bin_location is None:
            continue
        counts[bin_location] = counts.get(bin_location, 0) + listing.quantity

    bins = [
        BinUsage(location=location, cards=cards, capacity=capacity)
        for location, cards in counts.items()
        if capacity - cards >= min_free_slots
    ]
    bins.sort(key=lambda usage: location_sort_key(usage.location))

    logger.info(
        "bin_analysis_complete",
        extra={
            "bins_total": len(counts),
            "bins_available": len(bins),
            "min_free_slots": min_free_slots,
        },
    )

    return BinAnalysis(capacity=capacity, min_free_slots=min_free_slots, bins=bins)


def sort_bins(analysis: BinAnalysis, order: BinSortOrder = "free_slots") -> list[BinUsage]:
    """Order bins by free slots (most first, then location) or by location."""
    if order == "location":
        return sorted(analysis.bins, key=lambda usage: location_sort_key(usage.location))
    return sorted(
        analysis.bins,
        key=lambda usage: (-usage.free_slots, location_sort_key(usage.location)),
    )


def format_bin_analysis(analysis: BinAnalysis, order: BinSortOrder = "free_slots") -> str:
    """Render the bin analysis as text."""
    lines = [
        f"Bin Analysis (Maximum Capacity per Bin: {analysis.capacity} cards)",
        "-----------------------------------------------",
        "",
    ]
    for usage in sort_bins(analysis, order):
        lines.append(f"{usage.location}: {usage.cards} cards ({usage.free_slots} slots free)")
    return "\n".join(lines) + "\n"
