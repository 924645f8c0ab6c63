from stockcheck.parsers.inventory_csv import (
    InventoryReadResult,
    parse_price_or_default,
    parse_quantity_or_default,
    read_inventory_file,
    read_inventory_text,
)
from stockcheck.parsers.wantslist import (
    parse_wantslist,
    parse_wants_line,
    read_wantslist_file,
)

__all__ = [
    "InventoryReadResult",
    "parse_price_or_default",
    "parse_quantity_or_default",
    "parse_wants_line",
    "parse_wantslist",
    "read_inventory_file",
    "read_inventory_text",
    "read_wantslist_file",
]
