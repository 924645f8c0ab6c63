"""
Inventory API endpoints.

Stores named inventory snapshots imported from Cardmarket stock exports.
"""

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from stockcheck.config import settings
from stockcheck.db import (
    delete_snapshot,
    get_snapshot,
    list_snapshots,
    replace_snapshot_listings,
    snapshot_to_listings,
)
from stockcheck.db.database import get_session
from stockcheck.models.failure import SnapshotExistsError, SnapshotNotFoundError
from stockcheck.models.listing import InventoryListing
from stockcheck.parsers.inventory_csv import read_inventory_text
from stockcheck.services.stock_analysis import analyze_bins, sort_bins

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["inventory"])


class SnapshotListResponse(BaseModel):
    """Names of all stored snapshots."""

    snapshots: list[str] = Field(default_factory=list)


class InventoryResponse(BaseModel):
    """Response model for snapshot statistics."""

    name: str
    listings: int = 0
    total_quantity: int = Field(
        default=0,
        description="Copies in stock, counting playset rows as four copies per unit",
    )
    unique_cards: int = 0
    without_location: int = Field(
        default=0,
        description="Listings that have no storage location",
    )


class InventoryImportRequest(BaseModel):
    """Request model for importing a stock export."""

    text: str = Field(
        ...,
        description="Cardmarket stock export (CSV, ';' or ',' separated, header row required)",
        examples=["name;quantity;price;language;condition\nLightning Bolt;4;1,50;English;NM"],
    )
    import_mode: Literal["new", "replace"] = Field(
        default="new",
        description="Import mode: 'new' fails if the snapshot exists, "
        "'replace' explicitly replaces it.",
    )


class ImportResponse(BaseModel):
    """Response model for inventory import."""

    name: str
    listings_imported: int
    skipped_rows: int = Field(
        default=0,
        description="Rows dropped for missing price/quantity or unreadable fields",
    )
    total_quantity: int = 0
    replaced_existing: bool = False


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    name: str
    deleted: bool
    message: str = ""


class BinResponse(BaseModel):
    """Fill level of one storage bin."""

    location: str
    cards: int
    free_slots: int


class BinAnalysisResponse(BaseModel):
    """Bins with room for new stock."""

    name: str
    capacity: int
    min_free_slots: int
    bins: list[BinResponse] = Field(default_factory=list)


async def load_snapshot_listings(session: AsyncSession, name: str) -> list[InventoryListing]:
    """
    Load a snapshot's listings in inventory order.

    Raises:
        SnapshotNotFoundError: If no snapshot exists under `name`
    """
    snapshot = await get_snapshot(session, name)
    if snapshot is None:
        raise SnapshotNotFoundError(name)
    return snapshot_to_listings(snapshot)


@router.get("", response_model=SnapshotListResponse)
async def get_snapshots(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SnapshotListResponse:
    """List stored inventory snapshots."""
    return SnapshotListResponse(snapshots=await list_snapshots(session))


@router.get("/{name}", response_model=InventoryResponse)
async def get_inventory(
    name: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> InventoryResponse:
    """Get statistics for a stored snapshot."""
    listings = await load_snapshot_listings(session, name)

    return InventoryResponse(
        name=name,
        listings=len(listings),
        total_quantity=sum(listing.available_quantity for listing in listings),
        unique_cards=len({listing.name.lower() for listing in listings}),
        without_location=sum(1 for listing in listings if not listing.has_location),
    )


@router.post("/{name}/import", response_model=ImportResponse)
async def import_inventory(
    name: str,
    request: InventoryImportRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ImportResponse:
    """
    Import a stock export into a named snapshot.

    Import modes:
    - import_mode="new": Fails with 409 if the snapshot already exists.
    - import_mode="replace": Replaces the existing snapshot.

    Rows with an empty price or quantity are skipped and reported in
    skipped_rows. A missing name/quantity/price column fails the import.
    """
    if not request.text or not request.text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Import text cannot be empty",
        )

    # Raises InventoryFormatError for a missing required column
    result = read_inventory_text(request.text)

    if not result.listings:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid listings found in import text",
        )

    existing = await get_snapshot(session, name)
    had_existing = existing is not None

    if had_existing and request.import_mode != "replace":
        raise SnapshotExistsError(name)

    await replace_snapshot_listings(session, name, result.listings)

    logger.info(
        "inventory_imported",
        extra={
            "snapshot": name,
            "listings": len(result.listings),
            "skipped_rows": result.skipped_rows,
            "replaced_existing": had_existing,
        },
    )

    return ImportResponse(
        name=name,
        listings_imported=len(result.listings),
        skipped_rows=result.skipped_rows,
        total_quantity=result.total_quantity,
        replaced_existing=had_existing,
    )


@router.delete("/{name}", response_model=DeleteResponse)
async def delete_inventory(
    name: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """Delete a stored snapshot and all of its listings."""
    deleted = await delete_snapshot(session, name)

    if deleted:
        message = "The inventory snapshot has been deleted."
    else:
        message = "No inventory snapshot found to delete."

    return DeleteResponse(name=name, deleted=deleted, message=message)


@router.get("/{name}/bins", response_model=BinAnalysisResponse)
async def get_bin_analysis(
    name: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    min_free_slots: Annotated[int, Query(ge=0)] = 1,
    sort: Literal["free_slots", "location"] = "free_slots",
) -> BinAnalysisResponse:
    """Storage bins of a snapshot that have at least `min_free_slots` free."""
    listings = await load_snapshot_listings(session, name)
    analysis = analyze_bins(listings, min_free_slots, capacity=settings.bin_capacity)

    return BinAnalysisResponse(
        name=name,
        capacity=analysis.capacity,
        min_free_slots=analysis.min_free_slots,
        bins=[
            BinResponse(location=usage.location, cards=usage.cards, free_slots=usage.free_slots)
            for usage in sort_bins(analysis, sort)
        ],
    )
