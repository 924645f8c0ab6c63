"""
SQLAlchemy ORM models for persistent storage.

Models mirror the listing dataclass but add database persistence.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class InventorySnapshotDB(Base):
    """
    A named inventory snapshot stored in the database.

    Each import replaces the listings of a snapshot wholesale.
    """

    __tablename__ = "inventory_snapshots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Listings keep the order of the original export
    listings: Mapped[list["InventoryListingDB"]] = relationship(
        back_populates="snapshot",
        cascade="all, delete-orphan",
        order_by="InventoryListingDB.position",
    )

    def __repr__(self) -> str:
        return f"<InventorySnapshotDB(id={self.id}, name={self.name})>"


class InventoryListingDB(Base):
    """One inventory row within a snapshot."""

    __tablename__ = "inventory_listings"
    __table_args__ = (UniqueConstraint("snapshot_id", "position", name="uq_snapshot_position"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    snapshot_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("inventory_snapshots.id", ondelete="CASCADE"), index=True
    )
    position: Mapped[int] = mapped_column(Integer)

    name: Mapped[str] = mapped_column(String(255), index=True)
    set_code: Mapped[str] = mapped_column(String(16), default="")
    set_name: Mapped[str] = mapped_column(String(255), default="")
    collector_number: Mapped[str] = mapped_column(String(32), default="")
    condition: Mapped[str] = mapped_column(String(2))
    language: Mapped[str] = mapped_column(String(16))
    is_foil: Mapped[bool] = mapped_column(Boolean, default=False)
    is_signed: Mapped[bool] = mapped_column(Boolean, default=False)
    is_playset: Mapped[bool] = mapped_column(Boolean, default=False)
    quantity: Mapped[int] = mapped_column(Integer, default=0)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    rarity: Mapped[str] = mapped_column(String(32), default="")
    cardmarket_id: Mapped[str] = mapped_column(String(32), default="")
    location: Mapped[str | None] = mapped_column(String(64), nullable=True)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Keyed by language name ("German", ...)
    localized_names: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)

    snapshot: Mapped["InventorySnapshotDB"] = relationship(back_populates="listings")

    def __repr__(self) -> str:
        return f"<InventoryListingDB(name={self.name}, qty={self.quantity})>"
