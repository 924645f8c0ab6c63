"""
Stock reconciliation.

Matches want-list entries against an inventory snapshot by card name,
aggregates available copies across variant rows, and classifies availability.

Matching is exact, case-insensitive name equality against the English name
or a printed (localized) name. There is no fuzzy, diacritic-folding or
printing-aware matching; two printings of the same card match the same want
entry.
"""

from collections.abc import Sequence

from stockcheck.models.listing import InventoryListing, Language
from stockcheck.models.match import AvailabilityStatus, MatchResult, PickLine
from stockcheck.models.want import WantEntry


def normalize_card_name(name: str) -> str:
    """Comparison key for card names."""
    return name.strip().lower()


def _listing_names(listing: InventoryListing, language: Language | None) -> set[str]:
    """
    Comparison keys a want entry may use for this listing.

    The English name always counts. Without a language filter every printed
    name counts; with one, only the name in that language.
    """
    names = {normalize_card_name(listing.name)}
    if language is None:
        localized = list(listing.localized_names.values())
    else:
        localized = [listing.localized_names.get(language, "")]
    names.update(normalize_card_name(name) for name in localized if name.strip())
    return names


def classify_status(available: int, desired: int, has_matches: bool) -> AvailabilityStatus:
    """
    Classify availability for one want entry.

    NOT_IN_STOCK only when nothing matched at all. A non-empty match set that
    sums to fewer copies than desired (including zero) is partial.
    """
    if not has_matches:
        return AvailabilityStatus.NOT_IN_STOCK
    if available >= desired:
        return AvailabilityStatus.FULLY_AVAILABLE
    return AvailabilityStatus.PARTIALLY_AVAILABLE


def match_want(
    want: WantEntry,
    inventory: Sequence[InventoryListing],
    language: Language | None = None,
) -> MatchResult:
    """
    Reconcile a single want entry against the inventory.

    Args:
        want: The wanted card and quantity
        inventory: Listings in inventory order
        language: When set, only listings in this language are considered and
            only their English or same-language name is compared

    Returns:
        MatchResult with matched listings in inventory order
    """
    key = normalize_card_name(want.name)
    matches = tuple(
        listing
        for listing in inventory
        if (language is None or listing.language == language)
        and key in _listing_names(listing, language)
    )

    available = sum(listing.available_quantity for listing in matches)

    return MatchResult(
        want=want,
        matches=matches,
        available=available,
        status=classify_status(available, want.quantity, bool(matches)),
    )


def match(
    inventory: Sequence[InventoryListing],
    wants: Sequence[WantEntry],
    *,
    language: Language | None = None,
) -> list[MatchResult]:
    """
    Reconcile a want-list against an inventory snapshot.

    Pure and deterministic: one result per want entry, in want-list order.
    An empty inventory resolves every entry to NOT_IN_STOCK.

    Args:
        inventory: Listings in inventory order
        wants: Want entries in want-list order
        language: Restrict matching to one language (None matches any)

    Returns:
        List of MatchResult, same length and order as `wants`
    """
    return [match_want(want, inventory, language) for want in wants]


def pick_counts(result: MatchResult) -> list[int]:
    """
    Copies to take from each matched listing, aligned with `result.matches`.

    Takes from matched listings in inventory order until the wanted quantity
    is reached. Counts are by position, so a listing that appears twice in
    the inventory is drawn down once per row.
    """
    remaining = result.want.quantity
    counts: list[int] = []

    for listing in result.matches:
        copies = max(min(remaining, listing.available_quantity), 0)
        counts.append(copies)
        remaining -= copies

    return counts


def allocate(result: MatchResult) -> list[PickLine]:
    """
    Choose the copies to pick for one result.

    Listings with nothing to pick are left out.

    Returns:
        Pick lines totalling min(wanted, available) copies
    """
    return [
        PickLine(listing=listing, quantity=copies)
        for listing, copies in zip(result.matches, pick_counts(result), strict=True)
        if copies > 0
    ]


def allocate_all(results: Sequence[MatchResult]) -> list[PickLine]:
    """Pick lines for every result, in result order."""
    return [pick for result in results for pick in allocate(result)]


def summarize(results: Sequence[MatchResult]) -> dict[AvailabilityStatus, int]:
    """Count results per availability status (all statuses present)."""
    counts = dict.fromkeys(AvailabilityStatus, 0)
    for result in results:
        counts[result.status] += 1
    return counts
