from stockcheck.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    FailureDetail,
    FailureKind,
    InventoryFormatError,
    KnownError,
    OutcomeType,
    SnapshotExistsError,
    SnapshotNotFoundError,
    create_known_failure,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from stockcheck.models.listing import Condition, InventoryListing, Language
from stockcheck.models.match import AvailabilityStatus, MatchResult, PickLine
from stockcheck.models.want import WantEntry

__all__ = [
    "ApiResponse",
    "AvailabilityStatus",
    "Condition",
    "FailureDetail",
    "FailureKind",
    "InventoryFormatError",
    "InventoryListing",
    "KnownError",
    "Language",
    "MatchResult",
    "OutcomeType",
    "PickLine",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "SnapshotExistsError",
    "SnapshotNotFoundError",
    "WantEntry",
    "create_known_failure",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
]
