from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from stockcheck.config import LOCATION_UNKNOWN, PLAYSET_SIZE


class Language(str, Enum):
    """Card languages carried in the inventory export."""

    ENGLISH = "English"
    GERMAN = "German"
    SPANISH = "Spanish"
    FRENCH = "French"
    ITALIAN = "Italian"

    @property
    def code(self) -> str:
        """Two-letter language code (en, de, es, fr, it)."""
        return _LANGUAGE_CODES[self]

    @classmethod
    def parse(cls, value: str | None) -> "Language | None":
        """Parse a full language name or two-letter code, case-insensitively."""
        if not value:
            return None
        key = value.strip().lower()
        for language in cls:
            if key in (language.value.lower(), language.code):
                return language
        return None


_LANGUAGE_CODES: dict[Language, str] = {
    Language.ENGLISH: "en",
    Language.GERMAN: "de",
    Language.SPANISH: "es",
    Language.FRENCH: "fr",
    Language.ITALIAN: "it",
}


class Condition(str, Enum):
    """Cardmarket condition grades, best to worst."""

    MINT = "MT"
    NEAR_MINT = "NM"
    EXCELLENT = "EX"
    GOOD = "GD"
    LIGHT_PLAYED = "LP"
    PLAYED = "PL"
    POOR = "PO"

    @classmethod
    def parse(cls, value: str | None) -> "Condition | None":
        """
        Parse a condition grade.

        Accepts the short code ("NM") or the long name ("Near Mint",
        "near_mint"), case-insensitively.
        """
        if not value:
            return None
        key = value.strip().upper().replace("_", " ")
        for condition in cls:
            if key in (condition.value, condition.name.replace("_", " ")):
                return condition
        return None


@dataclass(frozen=True, slots=True)
class InventoryListing:
    """
    One sellable inventory row for a specific card variant.

    Attributes:
        name: English card name as exported
        set_code: Set code (e.g., "LEB", "MH2")
        collector_number: Collector number within the set (may be alphanumeric)
        condition: Condition grade
        language: Printed language of the copies
        is_foil: Foil printing
        is_signed: Signed by the artist
        quantity: Rows on hand, never negative
        price: Unit price in euros
        location: Storage location code (e.g., "A-0-1-4"), if known
        comment: Free-text seller comment
        set_name: Full set name
        rarity: Rarity as exported
        is_playset: Row stands for a playset of four copies per unit
        cardmarket_id: Cardmarket product id
        localized_names: Printed names in the non-English languages
    """

    name: str
    set_code: str = ""
    collector_number: str = ""
    condition: Condition = Condition.NEAR_MINT
    language: Language = Language.ENGLISH
    is_foil: bool = False
    is_signed: bool = False
    quantity: int = 0
    price: Decimal = Decimal("0")
    location: str | None = None
    comment: str | None = None
    set_name: str = ""
    rarity: str = ""
    is_playset: bool = False
    cardmarket_id: str = ""
    localized_names: dict[Language, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError(f"Listing quantity cannot be negative: {self.quantity}")

    @property
    def available_quantity(self) -> int:
        """Copies this row can supply (playsets count four per unit)."""
        if self.is_playset:
            return self.quantity * PLAYSET_SIZE
        return self.quantity

    @property
    def display_name(self) -> str:
        """Name in the listing's own language, falling back to English."""
        localized = self.localized_names.get(self.language, "")
        return localized.strip() or self.name

    @property
    def has_location(self) -> bool:
        return bool(self.location and self.location.strip())

    @property
    def location_label(self) -> str:
        """Storage location, or "location unknown" when none is recorded."""
        if self.location and self.location.strip():
            return self.location.strip()
        return LOCATION_UNKNOWN

    def special_flags(self) -> list[str]:
        """Foil/Signed markers in display order."""
        flags = []
        if self.is_foil:
            flags.append("Foil")
        if self.is_signed:
            flags.append("Signed")
        return flags
