"""
Failure Explanation Envelope.

Every user-visible failure leaving the API is classified into one of the
outcome types below and wrapped in an ApiResponse.

Response types:
- Success: Operation completed successfully
- KnownFailure: System knows why it failed
- UnknownFailure: System does not know why it failed

All failure envelopes pass through `finalize_response()`.

Reconciliation results are never failures. "Not in stock" is data, carried
on MatchResult.status.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    MISSING_REQUIRED = "missing_required"

    # Resource failures
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"

    # Service failures
    SERVICE_UNAVAILABLE = "service_unavailable"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel, Generic[T]):
    """Response envelope for classified outcomes."""

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to a finalized ApiResponse."""
        response: ApiResponse[Any] = ApiResponse(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=self.kind,
                message=self.message,
                detail=self.detail,
                suggestion=self.suggestion,
            ),
        )
        return finalize_response(response)


class InventoryFormatError(KnownError):
    """
    The inventory export cannot be read as a whole.

    Raised for file-level problems such as a missing required column.
    Row-level problems never raise; those rows are skipped.
    """

    def __init__(self, missing_columns: list[str]):
        self.missing_columns = missing_columns
        super().__init__(
            kind=FailureKind.MISSING_REQUIRED,
            message="The inventory export is missing required columns.",
            detail=f"Missing columns: {', '.join(missing_columns)}",
            suggestion="Export the stock as CSV including name, quantity and price.",
            status_code=400,
        )


class SnapshotNotFoundError(KnownError):
    """No inventory snapshot is stored under the requested name."""

    def __init__(self, snapshot_name: str):
        self.snapshot_name = snapshot_name
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Inventory snapshot '{snapshot_name}' not found.",
            suggestion="Import the inventory first.",
            status_code=404,
        )


class SnapshotExistsError(KnownError):
    """An import would overwrite a snapshot without import_mode='replace'."""

    def __init__(self, snapshot_name: str):
        self.snapshot_name = snapshot_name
        super().__init__(
            kind=FailureKind.CONFLICT,
            message=f"Inventory snapshot '{snapshot_name}' already exists.",
            suggestion="To replace it, explicitly set import_mode='replace'.",
            status_code=409,
        )


# Standard messages for unclassified failures. Fixed, never derived from the
# exception text.

STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "The operation failed due to a known issue.",
    OutcomeType.UNKNOWN_FAILURE: (
        "I failed and I don't know why. Try simplifying the request or retrying."
    ),
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "Check the error details and adjust your request.",
    OutcomeType.UNKNOWN_FAILURE: "If this persists, please report the issue.",
}


# Track finalized responses by id
_finalized_responses: set[int] = set()


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Finalize a response through the failure boundary.

    Raises:
        ValueError: If response structure is invalid
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    else:
        if response.failure is None:
            raise ValueError(f"{response.outcome.value} response must have failure details")

    _finalized_responses.add(id(response))

    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    """Check if a response has passed through `finalize_response()`."""
    return id(response) in _finalized_responses


def create_unknown_failure(exception: Exception) -> ApiResponse[Any]:
    """
    Create an unknown failure response from an exception.

    The message is fixed. Only the exception type name is exposed.
    """
    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
            detail=type(exception).__name__,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE],
        ),
    )

    return finalize_response(response)


def create_known_failure(kind: FailureKind, reason: str) -> ApiResponse[Any]:
    """
    Create a known failure response with the standard message.

    Args:
        kind: The classification of the failure
        reason: Technical description of what went wrong
    """
    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.KNOWN_FAILURE,
        failure=FailureDetail(
            kind=kind,
            message=STANDARD_MESSAGES[OutcomeType.KNOWN_FAILURE],
            detail=reason,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.KNOWN_FAILURE],
        ),
    )

    return finalize_response(response)
