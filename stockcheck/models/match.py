import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from stockcheck.config import PLAYSET_SIZE
from stockcheck.models.listing import InventoryListing
from stockcheck.models.want import WantEntry


class AvailabilityStatus(str, Enum):
    """How well the inventory covers one want entry."""

    FULLY_AVAILABLE = "FULLY_AVAILABLE"
    PARTIALLY_AVAILABLE = "PARTIALLY_AVAILABLE"
    NOT_IN_STOCK = "NOT_IN_STOCK"


@dataclass(frozen=True, slots=True)
class MatchResult:
    """
    Reconciliation outcome for a single want entry.

    Attributes:
        want: The originating want entry
        matches: Listings whose name equals the wanted name, in inventory order
        available: Copies summed across all matches
        status: Availability classification derived from available vs wanted
    """

    want: WantEntry
    matches: tuple[InventoryListing, ...]
    available: int
    status: AvailabilityStatus

    @property
    def missing(self) -> int:
        """Copies that cannot be supplied from stock."""
        return max(self.want.quantity - self.available, 0)

    @property
    def is_fulfilled(self) -> bool:
        return self.status == AvailabilityStatus.FULLY_AVAILABLE


@dataclass(frozen=True, slots=True)
class PickLine:
    """Copies to take from one listing when fulfilling a want entry."""

    listing: InventoryListing
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.listing.price * self.quantity

    @property
    def stock_units(self) -> int:
        """Listing units to remove from stock; a started playset counts whole."""
        if self.listing.is_playset:
            return math.ceil(self.quantity / PLAYSET_SIZE)
        return self.quantity
