"""
Stock check API endpoints.

Reconciles a want-list against a stored inventory snapshot.
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from stockcheck.api.inventory import load_snapshot_listings
from stockcheck.config import settings
from stockcheck.db.database import get_session
from stockcheck.models.listing import InventoryListing, Language
from stockcheck.models.match import AvailabilityStatus, MatchResult
from stockcheck.parsers.wantslist import parse_wantslist
from stockcheck.services.formatters import RenderView, render
from stockcheck.services.stock_matching import allocate_all, match, pick_counts, summarize

router = APIRouter(prefix="/stock", tags=["stock"])


class StockCheckRequest(BaseModel):
    """Request model for checking a want-list against a snapshot."""

    wants: str = Field(
        ...,
        description="Want-list text, one '<quantity> <card name>' per line",
        examples=["Deck\n4 Lightning Bolt\n2 Counterspell"],
    )
    language: str | None = Field(
        default=None,
        description="Only match listings in this language (name or code, e.g. 'German', 'de')",
    )


class RenderRequest(StockCheckRequest):
    """Request model for a rendered text view."""

    view: RenderView = Field(
        default="summary",
        description="summary, picking, route, invoice or stock_update",
    )


class ListingDetail(BaseModel):
    """One matched inventory listing."""

    name: str
    display_name: str
    set_code: str
    set_name: str
    collector_number: str
    condition: str
    language: str
    is_foil: bool
    is_signed: bool
    is_playset: bool
    quantity: int
    available_quantity: int
    price: Decimal
    location: str
    comment: str | None = None
    pick: int = Field(
        default=0,
        description="Copies allocated from this listing for the want entry",
    )


class WantResult(BaseModel):
    """Reconciliation result for one want entry."""

    quantity: int
    name: str
    status: AvailabilityStatus
    available: int
    missing: int
    matches: list[ListingDetail] = Field(default_factory=list)


class StockCheckResponse(BaseModel):
    """Response model for a stock check."""

    snapshot: str
    language: str | None = None
    results: list[WantResult] = Field(default_factory=list)
    fully_available: int = 0
    partially_available: int = 0
    not_in_stock: int = 0
    total_picked: int = 0
    total_price: Decimal = Decimal("0")


def _resolve_language(value: str | None) -> Language | None:
    """Request language, falling back to the configured default."""
    value = value or settings.default_language
    if not value:
        return None
    language = Language.parse(value)
    if language is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown language '{value}'",
        )
    return language


def _listing_detail(listing: InventoryListing, pick: int) -> ListingDetail:
    return ListingDetail(
        name=listing.name,
        display_name=listing.display_name,
        set_code=listing.set_code,
        set_name=listing.set_name,
        collector_number=listing.collector_number,
        condition=listing.condition.value,
        language=listing.language.value,
        is_foil=listing.is_foil,
        is_signed=listing.is_signed,
        is_playset=listing.is_playset,
        quantity=listing.quantity,
        available_quantity=listing.available_quantity,
        price=listing.price,
        location=listing.location_label,
        comment=listing.comment,
        pick=pick,
    )


def _want_result(result: MatchResult) -> WantResult:
    return WantResult(
        quantity=result.want.quantity,
        name=result.want.name,
        status=result.status,
        available=result.available,
        missing=result.missing,
        matches=[
            _listing_detail(listing, picked)
            for listing, picked in zip(result.matches, pick_counts(result), strict=True)
        ],
    )


async def _reconcile(
    session: AsyncSession, name: str, request: StockCheckRequest
) -> tuple[list[MatchResult], Language | None]:
    if not request.wants or not request.wants.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Want-list cannot be empty",
        )
    language = _resolve_language(request.language)
    inventory = await load_snapshot_listings(session, name)
    wants = parse_wantslist(request.wants)
    return match(inventory, wants, language=language), language


@router.post("/{name}/check", response_model=StockCheckResponse)
async def check_stock(
    name: str,
    request: StockCheckRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> StockCheckResponse:
    """
    Check a want-list against a stored snapshot.

    Returns one result per parsed want entry, in want-list order, with every
    matching listing and the copies allocated from it. Malformed want-list
    lines are skipped.
    """
    results, language = await _reconcile(session, name, request)
    counts = summarize(results)
    picks = allocate_all(results)

    return StockCheckResponse(
        snapshot=name,
        language=language.value if language else None,
        results=[_want_result(result) for result in results],
        fully_available=counts[AvailabilityStatus.FULLY_AVAILABLE],
        partially_available=counts[AvailabilityStatus.PARTIALLY_AVAILABLE],
        not_in_stock=counts[AvailabilityStatus.NOT_IN_STOCK],
        total_picked=sum(pick.quantity for pick in picks),
        total_price=sum((pick.line_total for pick in picks), Decimal("0")),
    )


@router.post("/{name}/render", response_class=PlainTextResponse)
async def render_stock_check(
    name: str,
    request: RenderRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PlainTextResponse:
    """Render a stock check as text (summary, picking list, route, invoice, stock update CSV)."""
    results, _ = await _reconcile(session, name, request)
    return PlainTextResponse(render(results, request.view))
