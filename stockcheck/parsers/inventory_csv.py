"""
Parser for Cardmarket stock exports.

Export format (semicolon- or comma-separated, header row required):
    cardmarketId;quantity;name;set;setCode;cn;condition;language;isFoil;
    isPlayset;isSigned;price;comment;location;nameDE;nameES;nameFR;nameIT;rarity

Only name, quantity and price are required. Prices may use either "." or ","
as decimal mark ("1.50", "1,50", "1.234,50").

Row-level problems never abort a read: rows with an empty price or quantity,
an empty name, or an unrecognized language/condition are skipped and counted.
"""

import csv
import logging
import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from io import StringIO
from pathlib import Path

from stockcheck.models.failure import InventoryFormatError
from stockcheck.models.listing import Condition, InventoryListing, Language

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("name", "quantity", "price")

# Localized name columns in the export
LOCALIZED_NAME_COLUMNS: dict[Language, str] = {
    Language.GERMAN: "nameDE",
    Language.SPANISH: "nameES",
    Language.FRENCH: "nameFR",
    Language.ITALIAN: "nameIT",
}

TRUE_FLAGS = frozenset({"1", "true", "yes", "x", "foil", "signed", "playset"})

CENT = Decimal("0.01")

# "1.000" or "1,000,000": digit groups of three
_GROUPED_INTEGER = re.compile(r"^\d{1,3}([.,' ]\d{3})+$")


@dataclass
class InventoryReadResult:
    """Listings read from an export plus the number of rows dropped."""

    listings: list[InventoryListing] = field(default_factory=list)
    skipped_rows: int = 0

    @property
    def total_quantity(self) -> int:
        return sum(listing.available_quantity for listing in self.listings)


def parse_quantity_or_default(value: str | None, default: int = 0) -> int:
    """
    Parse a quantity cell, falling back to `default`.

    Accepts plain integers and digit groups ("1.000", "1,000").
    Unparsable or negative values yield `default`.
    """
    if value is None:
        return default
    text = value.strip()
    if not text:
        return default

    if _GROUPED_INTEGER.match(text):
        text = re.sub(r"[.,' ]", "", text)

    try:
        quantity = int(text)
    except ValueError:
        return default

    return quantity if quantity >= 0 else default


def parse_price_or_default(value: str | None, default: Decimal = Decimal("0")) -> Decimal:
    """
    Parse a locale-formatted price, falling back to `default`.

    The right-most "." or "," is the decimal mark; the other one is a
    thousands separator. Prices are rounded half-up to whole cents.
    """
    if value is None:
        return default
    text = value.strip().replace("€", "").replace(" ", "")
    if not text:
        return default

    last_dot = text.rfind(".")
    last_comma = text.rfind(",")
    if last_dot < 0 and last_comma < 0:
        normalized = text
    else:
        decimal_mark = "." if last_dot > last_comma else ","
        thousands_mark = "," if decimal_mark == "." else "."
        whole, _, fraction = text.replace(thousands_mark, "").rpartition(decimal_mark)
        normalized = f"{whole.replace(decimal_mark, '')}.{fraction}"

    try:
        price = Decimal(normalized)
        if not price.is_finite() or price < 0:
            return default
        return price.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return default


def parse_flag(value: str | None) -> bool:
    """Interpret an export flag cell ("1", "true", "x", ...)."""
    if not value:
        return False
    return value.strip().lower() in TRUE_FLAGS


def detect_delimiter(header_line: str) -> str:
    """Pick ";" when the header has more semicolons than commas, else ","."""
    return ";" if header_line.count(";") > header_line.count(",") else ","


def _cell(row: dict[str, str | None], column: str) -> str:
    value = row.get(column)
    return value.strip() if value else ""


def _row_to_listing(row: dict[str, str | None], row_number: int) -> InventoryListing | None:
    """Build a listing from one CSV row, or None when the row must be dropped."""
    name = _cell(row, "name")
    if not name:
        logger.warning("Skipping inventory row %d: empty card name", row_number)
        return None

    raw_language = _cell(row, "language")
    language = Language.parse(raw_language) if raw_language else Language.ENGLISH
    if language is None:
        logger.warning(
            "Skipping inventory row %d (%s): unknown language %r", row_number, name, raw_language
        )
        return None

    raw_condition = _cell(row, "condition")
    condition = Condition.parse(raw_condition) if raw_condition else Condition.NEAR_MINT
    if condition is None:
        logger.warning(
            "Skipping inventory row %d (%s): unknown condition %r", row_number, name, raw_condition
        )
        return None

    localized_names = {
        lang: _cell(row, column)
        for lang, column in LOCALIZED_NAME_COLUMNS.items()
        if _cell(row, column)
    }

    return InventoryListing(
        name=name,
        set_code=_cell(row, "setCode"),
        collector_number=_cell(row, "cn"),
        condition=condition,
        language=language,
        is_foil=parse_flag(row.get("isFoil")),
        is_signed=parse_flag(row.get("isSigned")),
        quantity=parse_quantity_or_default(row.get("quantity")),
        price=parse_price_or_default(row.get("price")),
        location=_cell(row, "location") or None,
        comment=_cell(row, "comment") or None,
        set_name=_cell(row, "set"),
        rarity=_cell(row, "rarity"),
        is_playset=parse_flag(row.get("isPlayset")),
        cardmarket_id=_cell(row, "cardmarketId"),
        localized_names=localized_names,
    )


def read_inventory_text(text: str) -> InventoryReadResult:
    """
    Parse a stock export into inventory listings.

    Args:
        text: Raw CSV text including the header row

    Returns:
        InventoryReadResult with listings in export order.
        Empty result if input is empty/whitespace.

    Raises:
        InventoryFormatError: If a required column is missing from the header
    """
    result = InventoryReadResult()
    if not text or not text.strip():
        return result

    text = text.lstrip("\ufeff")
    header_line = text.strip().split("\n", 1)[0]
    reader = csv.DictReader(StringIO(text.strip()), delimiter=detect_delimiter(header_line))

    fieldnames = [name.strip() for name in reader.fieldnames or []]
    reader.fieldnames = fieldnames
    missing = [column for column in REQUIRED_COLUMNS if column not in fieldnames]
    if missing:
        raise InventoryFormatError(missing)

    # Row 1 is the header
    for row_number, row in enumerate(reader, start=2):
        if not _cell(row, "price") or not _cell(row, "quantity"):
            result.skipped_rows += 1
            continue

        listing = _row_to_listing(row, row_number)
        if listing is None:
            result.skipped_rows += 1
            continue

        result.listings.append(listing)

    logger.info(
        "Loaded %d listings from inventory (skipped %d rows)",
        len(result.listings),
        result.skipped_rows,
    )
    return result


def read_inventory_file(path: Path | str) -> InventoryReadResult:
    """
    Read a stock export from disk.

    Raises:
        OSError: If the file cannot be read
        InventoryFormatError: If a required column is missing
    """
    path = Path(path)
    logger.info("Reading inventory CSV from: %s", path)
    return read_inventory_text(path.read_text(encoding="utf-8-sig"))
