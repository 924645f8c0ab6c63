"""Tests for database CRUD operations."""

from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from stockcheck.db.database import session_scope
from stockcheck.db.operations import (
    create_snapshot,
    delete_snapshot,
    get_or_create_snapshot,
    get_snapshot,
    list_snapshots,
    listing_to_row,
    replace_snapshot_listings,
    row_to_listing,
    snapshot_to_listings,
)
from stockcheck.models.db import Base
from stockcheck.models.listing import Condition, Language
from stockcheck.parsers.inventory_csv import read_inventory_text


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


class TestSnapshotOperations:
    async def test_create_snapshot(self, session: AsyncSession) -> None:
        snapshot = await create_snapshot(session, "shop")

        assert snapshot.id is not None
        assert snapshot.name == "shop"

    async def test_get_snapshot(self, session: AsyncSession) -> None:
        await create_snapshot(session, "shop")
        await session.commit()

        snapshot = await get_snapshot(session, "shop")

        assert snapshot is not None
        assert snapshot.name == "shop"

    async def test_get_missing_snapshot(self, session: AsyncSession) -> None:
        assert await get_snapshot(session, "missing") is None

    async def test_get_or_create(self, session: AsyncSession) -> None:
        snapshot, created = await get_or_create_snapshot(session, "shop")
        await session.commit()
        again, created_again = await get_or_create_snapshot(session, "shop")

        assert created is True
        assert created_again is False
        assert again.id == snapshot.id

    async def test_list_snapshots(self, session: AsyncSession) -> None:
        await create_snapshot(session, "warehouse")
        await create_snapshot(session, "shop")
        await session.commit()

        assert await list_snapshots(session) == ["shop", "warehouse"]

    async def test_delete_snapshot(self, session: AsyncSession, make_listing) -> None:
        await replace_snapshot_listings(session, "shop", [make_listing()])
        await session.commit()

        deleted = await delete_snapshot(session, "shop")
        await session.commit()

        assert deleted is True
        assert await get_snapshot(session, "shop") is None

    async def test_delete_missing_snapshot(self, session: AsyncSession) -> None:
        assert await delete_snapshot(session, "missing") is False


class TestReplaceListings:
    async def test_stores_listings_in_order(
        self, session: AsyncSession, sample_inventory_csv: str
    ) -> None:
        listings = read_inventory_text(sample_inventory_csv).listings

        await replace_snapshot_listings(session, "shop", listings)
        await session.commit()

        snapshot = await get_snapshot(session, "shop")
        assert snapshot is not None
        assert snapshot_to_listings(snapshot) == listings

    async def test_sub_cent_price_survives_round_trip(self, session: AsyncSession) -> None:
        listings = read_inventory_text("name;quantity;price\nOpt;1;0,125\n").listings

        await replace_snapshot_listings(session, "shop", listings)
        await session.commit()
        session.expunge_all()

        snapshot = await get_snapshot(session, "shop")
        assert snapshot is not None
        assert snapshot_to_listings(snapshot)[0].price == Decimal("0.13")
        assert snapshot_to_listings(snapshot) == listings

    async def test_replaces_existing(self, session: AsyncSession, make_listing) -> None:
        await replace_snapshot_listings(session, "shop", [make_listing("Old Card", 2)])
        await session.commit()

        snapshot = await replace_snapshot_listings(session, "shop", [make_listing("New Card", 4)])
        await session.commit()

        assert [row.name for row in snapshot.listings] == ["New Card"]

    async def test_empty_replacement(self, session: AsyncSession, make_listing) -> None:
        await replace_snapshot_listings(session, "shop", [make_listing()])
        await session.commit()

        snapshot = await replace_snapshot_listings(session, "shop", [])
        await session.commit()

        assert snapshot_to_listings(snapshot) == []


class TestRowConversion:
    def test_round_trip_fields(self, make_listing) -> None:
        listing = make_listing(
            "Lightning Bolt",
            3,
            price="2.00",
            location="B-0-0-1",
            language=Language.GERMAN,
            condition=Condition.EXCELLENT,
            is_foil=True,
            is_playset=True,
            comment="Slight wear",
            localized_names={Language.GERMAN: "Blitzschlag"},
        )

        row = listing_to_row(listing, position=7)

        assert row.position == 7
        assert row.language == "German"
        assert row.condition == "EX"
        assert row.localized_names == {"German": "Blitzschlag"}
        assert row_to_listing(row) == listing

    def test_unknown_localized_language_dropped(self, make_listing) -> None:
        row = listing_to_row(make_listing(), position=0)
        row.localized_names = {"Klingon": "x", "French": "Foudre"}

        listing = row_to_listing(row)

        assert listing.localized_names == {Language.FRENCH: "Foudre"}
        assert listing.price == Decimal("1.00")


class TestSessionScope:
    async def test_commits_on_success(self, async_engine) -> None:
        factory = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

        with patch("stockcheck.db.database.async_session_factory", new=factory):
            async with session_scope() as session:
                await create_snapshot(session, "shop")

        async with factory() as session:
            assert await list_snapshots(session) == ["shop"]

    async def test_rolls_back_on_database_error(self, async_engine) -> None:
        factory = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

        with patch("stockcheck.db.database.async_session_factory", new=factory):
            with pytest.raises(IntegrityError):
                async with session_scope() as session:
                    await create_snapshot(session, "shop")
                    await create_snapshot(session, "shop")

        async with factory() as session:
            assert await list_snapshots(session) == []
