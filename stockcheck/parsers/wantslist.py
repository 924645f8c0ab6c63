"""
Parser for customer want-lists.

Want-list format, one card per line:
    <quantity> <card name>

Example:
    Deck
    4 Lightning Bolt
    2 Fire // Ice

Arena deck exports are accepted as well; the set code and collector number
are dropped ("4 Lightning Bolt (LEB) 163" wants "Lightning Bolt").
"""

import logging
import re
from pathlib import Path

from stockcheck.models.want import WantEntry

logger = logging.getLogger(__name__)

# Pattern: "Lightning Bolt (LEB) 163" or "Card (SET) 290a"
# Groups: (card_name, set_code, collector_number)
ARENA_SUFFIX_PATTERN = re.compile(r"^(.+?)\s+\(([A-Z0-9]+)\)\s+(\S+)$")

# Section headers in deck exports
SECTION_HEADERS = frozenset({"deck", "sideboard", "commander", "companion"})


def parse_wants_line(line: str) -> WantEntry | None:
    """
    Parse one "<quantity> <name>" line.

    Returns None unless the line splits on its first space into a positive
    integer and a non-empty name.
    """
    parts = line.strip().split(" ", 1)
    if len(parts) != 2:
        return None

    quantity_text, name = parts[0], parts[1].strip()
    if not (quantity_text.isascii() and quantity_text.isdigit()) or not name:
        return None

    quantity = int(quantity_text)
    if quantity <= 0:
        return None

    arena = ARENA_SUFFIX_PATTERN.match(name)
    if arena:
        name = arena.group(1)

    return WantEntry(quantity=quantity, name=name)


def parse_wantslist(text: str) -> list[WantEntry]:
    """
    Parse want-list text into WantEntry objects.

    Args:
        text: Raw want-list text (clipboard paste or file contents)

    Returns:
        List of WantEntry objects in list order. Empty list if input is
        empty/whitespace.

    Handles:
        - Blank lines
        - Section headers (Deck, Sideboard, ...)
        - Malformed lines, which are skipped and logged
    """
    if not text or not text.strip():
        return []

    wants: list[WantEntry] = []
    skipped_lines = 0

    for line in text.splitlines():
        stripped = line.strip()

        if not stripped or stripped.lower() in SECTION_HEADERS:
            continue

        entry = parse_wants_line(stripped)
        if entry is None:
            logger.warning("Could not parse wantslist line: %s", stripped)
            skipped_lines += 1
            continue

        logger.debug("Parsed want: %d x %s", entry.quantity, entry.name)
        wants.append(entry)

    logger.info(
        "Loaded %d entries from wantslist (skipped %d unparseable lines)",
        len(wants),
        skipped_lines,
    )
    return wants


def read_wantslist_file(path: Path | str) -> list[WantEntry]:
    """
    Read a want-list from disk.

    Raises:
        OSError: If the file cannot be read
    """
    path = Path(path)
    logger.info("Reading wantslist from: %s", path)
    return parse_wantslist(path.read_text(encoding="utf-8-sig"))
