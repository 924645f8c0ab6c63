"""Tests for the failure envelope."""

import pytest

from stockcheck.models.failure import (
    STANDARD_MESSAGES,
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


class TestFinalizeResponse:
    def test_success_without_failure(self) -> None:
        response = ApiResponse(outcome=OutcomeType.SUCCESS, data={"ok": True})

        assert finalize_response(response) is response
        assert is_finalized(response)

    def test_success_with_failure_rejected(self) -> None:
        response = ApiResponse(
            outcome=OutcomeType.SUCCESS,
            failure=FailureDetail(kind=FailureKind.UNKNOWN, message="x"),
        )

        with pytest.raises(ValueError, match="must not have failure"):
            finalize_response(response)

    def test_failure_without_detail_rejected(self) -> None:
        response = ApiResponse(outcome=OutcomeType.KNOWN_FAILURE)

        with pytest.raises(ValueError, match="must have failure details"):
            finalize_response(response)

    def test_unfinalized(self) -> None:
        assert not is_finalized(ApiResponse(outcome=OutcomeType.SUCCESS))


class TestKnownErrors:
    def test_known_error_response(self) -> None:
        error = KnownError(FailureKind.CONFLICT, "Already exists", status_code=409)

        response = error.to_response()

        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.kind == FailureKind.CONFLICT
        assert response.failure.message == "Already exists"
        assert is_finalized(response)

    def test_inventory_format_error(self) -> None:
        error = InventoryFormatError(["quantity", "price"])

        assert error.kind == FailureKind.MISSING_REQUIRED
        assert error.status_code == 400
        assert error.detail == "Missing columns: quantity, price"

    def test_snapshot_not_found(self) -> None:
        error = SnapshotNotFoundError("shop")

        assert error.kind == FailureKind.NOT_FOUND
        assert error.status_code == 404
        assert "shop" in error.message

    def test_snapshot_exists(self) -> None:
        error = SnapshotExistsError("shop")

        assert error.kind == FailureKind.CONFLICT
        assert error.status_code == 409
        assert error.to_response().failure.suggestion == (
            "To replace it, explicitly set import_mode='replace'."
        )


class TestStandardFailures:
    def test_unknown_failure_hides_exception_text(self) -> None:
        response = create_unknown_failure(RuntimeError("secret connection string"))

        assert response.outcome == OutcomeType.UNKNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.message == STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE]
        assert response.failure.detail == "RuntimeError"
        assert "secret" not in response.model_dump_json()
        assert is_finalized(response)

    def test_known_failure(self) -> None:
        response = create_known_failure(FailureKind.SERVICE_UNAVAILABLE, "database offline")

        assert response.failure is not None
        assert response.failure.kind == FailureKind.SERVICE_UNAVAILABLE
        assert response.failure.detail == "database offline"
        assert is_finalized(response)
