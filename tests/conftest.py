from decimal import Decimal

import pytest

from stockcheck.models import failure as failure_module
from stockcheck.models.listing import Condition, InventoryListing, Language


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    Python reuses memory addresses for new objects, so id()-based tracking
    would otherwise leak between tests.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


@pytest.fixture
def sample_inventory_csv() -> str:
    """Cardmarket stock export with two rows that must be skipped."""
    return (
        "cardmarketId;quantity;name;set;setCode;cn;condition;language;isFoil;isPlayset;"
        "isSigned;price;comment;location;nameDE;nameES;nameFR;nameIT;rarity\n"
        "1001;2;Lightning Bolt;Magic 2010;M10;146;NM;English;;;;1,50;;A-0-1-4;"
        "Blitzschlag;Rayo;Foudre;Fulmine;Common\n"
        "1002;3;Lightning Bolt;Masters 25;A25;141;EX;German;1;;;2,00;;B-0-0-1;"
        "Blitzschlag;;;;Common\n"
        "1003;1;Counterspell;Ice Age;ICE;64;GD;English;;;;0,80;Slight wear;;"
        "Gegenzauber;;;;Common\n"
        "1004;;Shock;Core Set 2019;M19;156;NM;English;;;;0,10;;;;;;;Common\n"
        "1005;4;Llanowar Elves;Dominaria;DOM;168;NM;Japanese;;;;0,20;;A-0-1-4;;;;;Common\n"
        "1006;1;Sol Ring;Commander 2021;C21;263;NM;English;;1;;12,50;;A-0-1-10;;;;;Uncommon\n"
    )


@pytest.fixture
def sample_wantslist() -> str:
    """Want-list with a section header, a blank line and a malformed line."""
    return """Deck
4 Lightning Bolt
2 counterspell

Sol Ring x2
1 Shock"""


def _make_listing(
    name: str = "Lightning Bolt",
    quantity: int = 1,
    price: str = "1.00",
    location: str | None = None,
    language: Language = Language.ENGLISH,
    condition: Condition = Condition.NEAR_MINT,
    **kwargs,
) -> InventoryListing:
    """Build a listing with sensible defaults for tests."""
    return InventoryListing(
        name=name,
        quantity=quantity,
        price=Decimal(price),
        location=location,
        language=language,
        condition=condition,
        **kwargs,
    )


@pytest.fixture
def make_listing():
    return _make_listing
