from stockcheck.db.database import get_session, init_db
from stockcheck.db.operations import (
    create_snapshot,
    delete_snapshot,
    get_or_create_snapshot,
    get_snapshot,
    list_snapshots,
    replace_snapshot_listings,
    snapshot_to_listings,
)

__all__ = [
    "create_snapshot",
    "delete_snapshot",
    "get_or_create_snapshot",
    "get_session",
    "get_snapshot",
    "init_db",
    "list_snapshots",
    "replace_snapshot_listings",
    "snapshot_to_listings",
]
