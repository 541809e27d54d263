"""Unit tests for error classification utilities."""

import pytest
from pydantic import ValidationError

from carehub.core.db_client import DatabaseError, RecordNotFoundError
from carehub.core.errors import ErrorCode, ErrorSeverity, InvalidStateTransitionError, classify_error_with_response
from carehub.domain.create_models import HouseCreate


@pytest.mark.unit
class TestClassifyErrorWithResponse:
    """Tests for classify_error_with_response function."""

    def test_record_not_found(self):
        """Missing records map to 404."""
        error = classify_error_with_response(RecordNotFoundError("Record not found in houses: x"))

        assert error.code == ErrorCode.ERR_RECORD_NOT_FOUND
        assert error.http_status == 404
        assert "houses" in error.message

    def test_store_error(self):
        """Other store failures map to 500 without leaking details."""
        error = classify_error_with_response(DatabaseError("Invalid filter syntax: x"))

        assert error.code == ErrorCode.ERR_STORE
        assert error.http_status == 500
        assert error.severity == ErrorSeverity.HIGH
        assert "filter" not in error.message

    def test_invalid_transition(self):
        """State transition errors map to 409."""
        error = classify_error_with_response(InvalidStateTransitionError("not completed"))

        assert error.code == ErrorCode.ERR_INVALID_STATE_TRANSITION
        assert error.http_status == 409

    def test_pydantic_validation_error(self):
        """Model validation errors map to 400 with the first message."""
        with pytest.raises(ValidationError) as exc_info:
            HouseCreate(name="")

        error = classify_error_with_response(exc_info.value)

        assert error.code == ErrorCode.ERR_VALIDATION
        assert error.http_status == 400

    def test_rule_violation(self):
        """Plain ValueErrors are rule violations."""
        error = classify_error_with_response(ValueError("House Old Mill is archived"))

        assert error.code == ErrorCode.ERR_VALIDATION
        assert error.message == "House Old Mill is archived"

    def test_unknown_error(self):
        """Anything else is unknown."""
        error = classify_error_with_response(RuntimeError("boom"))

        assert error.code == ErrorCode.ERR_UNKNOWN
        assert error.http_status == 500
        assert error.suggestion
