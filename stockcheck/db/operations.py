"""
Database CRUD operations.

Provides async functions for creating, reading, replacing, and deleting
inventory snapshots.
"""

from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from stockcheck.models.db import InventoryListingDB, InventorySnapshotDB
from stockcheck.models.listing import Condition, InventoryListing, Language


async def get_snapshot(session: AsyncSession, name: str) -> InventorySnapshotDB | None:
    """
    Get an inventory snapshot by name.

    Returns None if no snapshot exists under this name.
    """
    result = await session.execute(
        select(InventorySnapshotDB)
        .where(InventorySnapshotDB.name == name)
        .options(selectinload(InventorySnapshotDB.listings))
    )
    return result.scalar_one_or_none()


async def list_snapshots(session: AsyncSession) -> list[str]:
    """Names of all stored snapshots, alphabetically."""
    result = await session.execute(
        select(InventorySnapshotDB.name).order_by(InventorySnapshotDB.name)
    )
    return list(result.scalars().all())


async def create_snapshot(session: AsyncSession, name: str) -> InventorySnapshotDB:
    """
    Create a new, empty snapshot.

    Raises IntegrityError if the snapshot already exists.
    """
    snapshot = InventorySnapshotDB(name=name)
    session.add(snapshot)
    await session.flush()
    return snapshot


async def get_or_create_snapshot(
    session: AsyncSession, name: str
) -> tuple[InventorySnapshotDB, bool]:
    """
    Get existing snapshot or create new one.

    Returns:
        Tuple of (snapshot, created) where created is True if new.
    """
    snapshot = await get_snapshot(session, name)
    if snapshot:
        return snapshot, False

    snapshot = await create_snapshot(session, name)
    return snapshot, True


def listing_to_row(listing: InventoryListing, position: int) -> InventoryListingDB:
    """Convert a domain listing to an ORM row at the given inventory position."""
    return InventoryListingDB(
        position=position,
        name=listing.name,
        set_code=listing.set_code,
        set_name=listing.set_name,
        collector_number=listing.collector_number,
        condition=listing.condition.value,
        language=listing.language.value,
        is_foil=listing.is_foil,
        is_signed=listing.is_signed,
        is_playset=listing.is_playset,
        quantity=listing.quantity,
        price=listing.price,
        rarity=listing.rarity,
        cardmarket_id=listing.cardmarket_id,
        location=listing.location,
        comment=listing.comment,
        localized_names={lang.value: name for lang, name in listing.localized_names.items()},
    )


def row_to_listing(row: InventoryListingDB) -> InventoryListing:
    """Convert an ORM row back to a domain listing."""
    localized_names: dict[Language, str] = {}
    for language_name, name in (row.localized_names or {}).items():
        language = Language.parse(language_name)
        if language is not None:
            localized_names[language] = name

    return InventoryListing(
        name=row.name,
        set_code=row.set_code,
        collector_number=row.collector_number,
        condition=Condition(row.condition),
        language=Language(row.language),
        is_foil=row.is_foil,
        is_signed=row.is_signed,
        quantity=row.quantity,
        price=row.price,
        location=row.location,
        comment=row.comment,
        set_name=row.set_name,
        rarity=row.rarity,
        is_playset=row.is_playset,
        cardmarket_id=row.cardmarket_id,
        localized_names=localized_names,
    )


async def replace_snapshot_listings(
    session: AsyncSession,
    name: str,
    listings: Sequence[InventoryListing],
) -> InventorySnapshotDB:
    """
    Replace a snapshot's listings, creating the snapshot if needed.

    Listing order is preserved via the position column.
    """
    await get_or_create_snapshot(session, name)

    # Always re-fetch with eager loading to avoid async lazy load issues
    loaded = await get_snapshot(session, name)
    if not loaded:
        msg = f"Snapshot {name} not found after creation"
        raise RuntimeError(msg)
    snapshot = loaded

    await session.execute(
        delete(InventoryListingDB).where(InventoryListingDB.snapshot_id == snapshot.id)
    )
    # Clear the ORM list to stay in sync
    snapshot.listings.clear()

    for position, listing in enumerate(listings):
        snapshot.listings.append(listing_to_row(listing, position))

    await session.flush()
    return snapshot


def snapshot_to_listings(snapshot: InventorySnapshotDB) -> list[InventoryListing]:
    """Convert a database snapshot to domain listings in inventory order."""
    rows = sorted(snapshot.listings, key=lambda row: row.position)
    return [row_to_listing(row) for row in rows]


async def delete_snapshot(session: AsyncSession, name: str) -> bool:
    """
    Delete a snapshot and all of its listings.

    Returns True if deleted, False if not found.
    """
    snapshot = await get_snapshot(session, name)
    if not snapshot:
        return False

    await session.delete(snapshot)
    return True
