"""
Text renderers for reconciliation results.

Views:
- summary: one line per want entry with wanted vs available and status
- picking: matched listings grouped under each want entry
- route: allocated picks across all entries, sorted by storage location
- invoice: allocated picks with unit prices and totals
- stock_update: Cardmarket CSV with negative quantities for allocated picks
"""

import csv
from collections.abc import Callable, Sequence
from decimal import Decimal
from io import StringIO
from typing import Literal

from stockcheck.models.listing import InventoryListing
from stockcheck.models.match import AvailabilityStatus, MatchResult, PickLine
from stockcheck.services.stock_analysis import location_sort_key
from stockcheck.services.stock_matching import allocate_all, pick_counts, summarize

RenderView = Literal["summary", "picking", "route", "invoice", "stock_update"]

SEPARATOR = "========================"

STOCK_UPDATE_COLUMNS = (
    "cardmarketId",
    "quantity",
    "name",
    "set",
    "setCode",
    "cn",
    "condition",
    "language",
    "isFoil",
    "isPlayset",
    "isSigned",
    "price",
    "comment",
    "location",
    "nameDE",
    "nameES",
    "nameFR",
    "nameIT",
    "rarity",
)


def _euros(amount: Decimal) -> str:
    return f"{amount:.2f} €"


def _picking_name(listing: InventoryListing) -> str:
    """Display name with foil/signed markers, playset tag and seller note."""
    name = listing.display_name
    flags = listing.special_flags()
    if flags:
        name = f"{name} ({', '.join(flags)})"
    if listing.is_playset:
        name = f"{name} [Playset]"
    if listing.comment:
        name = f"{name} - Note: {listing.comment}"
    return name


def _table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> list[str]:
    """Left-aligned, pipe-separated table with a dashed rule under the header."""
    widths = [len(title) for title in header]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row, strict=True)]

    def line(cells: Sequence[str]) -> str:
        return " | ".join(cell.ljust(width) for cell, width in zip(cells, widths, strict=True))

    rule = "-+-".join("-" * width for width in widths)
    return [line(header), rule, *(line(row) for row in rows), rule]


def format_summary(results: Sequence[MatchResult]) -> str:
    """One line per want entry showing wanted vs available totals and status."""
    if not results:
        return "The want-list is empty.\n"

    lines: list[str] = []
    for result in results:
        want = result.want
        if result.status == AvailabilityStatus.NOT_IN_STOCK:
            detail = "not in stock"
        elif result.missing:
            detail = f"{result.available} available, {result.missing} missing"
        else:
            detail = f"{result.available} available"
        lines.append(f"{want.quantity} x {want.name}: {detail} [{result.status.value}]")

    counts = summarize(results)
    lines.append(SEPARATOR)
    lines.append(f"Fully available: {counts[AvailabilityStatus.FULLY_AVAILABLE]}")
    lines.append(f"Partially available: {counts[AvailabilityStatus.PARTIALLY_AVAILABLE]}")
    lines.append(f"Not in stock: {counts[AvailabilityStatus.NOT_IN_STOCK]}")
    return "\n".join(lines) + "\n"


def format_picking_list(results: Sequence[MatchResult]) -> str:
    """
    Matched listings grouped under their want entry.

    Every matched listing gets its own row, including listings that share a
    location. Listings without a location are shown as "location unknown".
    """
    if not results:
        return "The want-list is empty.\n"

    lines: list[str] = []
    for result in results:
        want = result.want
        if result.status == AvailabilityStatus.NOT_IN_STOCK:
            lines.append(f"{want.quantity} x {want.name} [{result.status.value}]")
            lines.append("    not in stock")
            lines.append("")
            continue

        lines.append(
            f"{want.quantity} x {want.name} ({result.available} available) [{result.status.value}]"
        )
        for listing, picked in zip(result.matches, pick_counts(result), strict=True):
            flags = ", ".join(listing.special_flags()) or "-"
            lines.append(
                f"    {listing.location_label} | {listing.condition.value} | "
                f"{listing.language.value} | {flags} | {_euros(listing.price)} | "
                f"{listing.available_quantity} in stock | pick {picked}"
            )
        if result.missing:
            lines.append(
                f"    WARNING: Only {result.available} of {want.quantity} copies available!"
            )
        lines.append("")

    return "\n".join(lines)


def format_pick_route(results: Sequence[MatchResult]) -> str:
    """
    Allocated picks for all entries in one table, in storage walking order.

    Picks without a location come last.
    """
    picks = sorted(
        allocate_all(results),
        key=lambda pick: location_sort_key(pick.listing.location),
    )
    if not picks:
        return "No cards from the want-list were found in stock.\n"

    rows = [
        (
            pick.listing.location_label,
            str(pick.quantity),
            _picking_name(pick.listing),
            pick.listing.language.value,
            pick.listing.condition.value,
            pick.listing.rarity,
            pick.listing.collector_number,
            pick.listing.set_name or pick.listing.set_code,
        )
        for pick in picks
    ]
    header = ("Location", "Qty", "Name", "Language", "Cond", "Rarity", "Collector Number", "Set")
    lines = _table(header, rows)
    lines.append(f"Total cards picked: {sum(pick.quantity for pick in picks)}")
    return "\n".join(line.rstrip() for line in lines) + "\n"


def format_invoice_list(results: Sequence[MatchResult]) -> str:
    """Allocated picks with unit price, line total and grand total."""
    picks = allocate_all(results)
    if not picks:
        return "No cards from the want-list were found in stock.\n"

    rows = []
    for pick in picks:
        listing = pick.listing
        name = listing.name
        flags = listing.special_flags()
        if flags:
            name = f"{name} ({', '.join(flags)})"
        rows.append(
            (
                str(pick.quantity),
                name,
                listing.language.value,
                listing.condition.value,
                _euros(listing.price),
                _euros(pick.line_total),
            )
        )

    lines = _table(("Qty", "Name", "Lang", "Cond", "Price", "Total"), rows)
    grand_total = sum((pick.line_total for pick in picks), Decimal("0"))
    lines.append(f"Total: {_euros(grand_total)}")
    return "\n".join(line.rstrip() for line in lines) + "\n"


def _flag(value: bool) -> str:
    return "1" if value else ""


def _stock_update_row(pick: PickLine) -> list[str]:
    listing = pick.listing
    localized = {language.value: name for language, name in listing.localized_names.items()}
    return [
        listing.cardmarket_id,
        str(-pick.stock_units),
        listing.name,
        listing.set_name,
        listing.set_code,
        listing.collector_number,
        listing.condition.value,
        listing.language.value,
        _flag(listing.is_foil),
        _flag(listing.is_playset),
        _flag(listing.is_signed),
        f"{listing.price:.2f}",
        listing.comment or "",
        listing.location or "",
        localized.get("German", ""),
        localized.get("Spanish", ""),
        localized.get("French", ""),
        localized.get("Italian", ""),
        listing.rarity,
    ]


def format_stock_update_csv(results: Sequence[MatchResult]) -> str:
    """
    Stock-reduction CSV for the allocated picks.

    Quantities are negative so that uploading the file removes the sold
    copies. Playset rows are reduced by whole playsets. Other columns are
    carried over unchanged.
    """
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(STOCK_UPDATE_COLUMNS)
    for pick in allocate_all(results):
        writer.writerow(_stock_update_row(pick))
    return buffer.getvalue()


RENDERERS: dict[str, Callable[[Sequence[MatchResult]], str]] = {
    "summary": format_summary,
    "picking": format_picking_list,
    "route": format_pick_route,
    "invoice": format_invoice_list,
    "stock_update": format_stock_update_csv,
}


def render(results: Sequence[MatchResult], view: RenderView = "summary") -> str:
    """Render results in the requested view."""
    return RENDERERS[view](results)
