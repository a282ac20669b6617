"""
Unit tests for the shared error taxonomy.
"""

import pytest

from shared.errors import (
    InvalidArgumentException,
    LimitExceededException,
    LimitExceededMessage,
    MomentoErrorCode,
    NotFoundException,
    SdkException,
    TransportErrorDetails,
    determine_limit_cause,
)


class TestSdkException:
    """Test cases for SdkException."""

    def test_defaults(self):
        error = SdkException("boom")

        assert error.message == "boom"
        assert error.error_code == MomentoErrorCode.UNKNOWN_SERVICE_ERROR
        assert error.transport_details is None
        assert str(error) == "boom"

    def test_subclass_pins_code(self):
        assert InvalidArgumentException().error_code == MomentoErrorCode.INVALID_ARGUMENT_ERROR
        assert NotFoundException().error_code == MomentoErrorCode.NOT_FOUND_ERROR

    def test_to_response(self):
        details = TransportErrorDetails(code="NOT_FOUND", details="missing", metadata={"cache": "c"})
        error = NotFoundException("Cache not found", transport_details=details)

        response = error.to_response()

        assert response.code == "NOT_FOUND_ERROR"
        assert response.message == "Cache not found"
        assert response.details["transport"]["metadata"] == {"cache": "c"}
        assert response.trace_id is None

    def test_repr(self):
        assert repr(InvalidArgumentException("bad")) == (
            "InvalidArgumentException(error_code=INVALID_ARGUMENT_ERROR, message='bad')"
        )


class TestLimitExceeded:
    """Test cases for limit exceeded causes."""

    @pytest.mark.parametrize("err_cause, expected", [
        ("topic_subscriptions_limit_exceeded", LimitExceededMessage.TOPIC_SUBSCRIPTIONS_LIMIT_EXCEEDED),
        ("operations_rate_limit_exceeded", LimitExceededMessage.OPERATIONS_RATE_LIMIT_EXCEEDED),
        ("throughput_rate_limit_exceeded", LimitExceededMessage.THROUGHPUT_RATE_LIMIT_EXCEEDED),
        ("request_size_limit_exceeded", LimitExceededMessage.REQUEST_SIZE_LIMIT_EXCEEDED),
        ("item_size_limit_exceeded", LimitExceededMessage.ITEM_SIZE_LIMIT_EXCEEDED),
        ("element_size_limit_exceeded", LimitExceededMessage.ELEMENT_SIZE_LIMIT_EXCEEDED),
    ])
    def test_err_causes(self, err_cause, expected):
        assert determine_limit_cause(err_cause, "") == expected

    def test_keyword_priority(self):
        """Earlier keywords win when several appear."""
        cause = determine_limit_cause(None, "operations exceeded while item size was too large")
        assert cause == LimitExceededMessage.OPERATIONS_RATE_LIMIT_EXCEEDED

    def test_request_size_keyword(self):
        assert determine_limit_cause(None, "request size too big") == LimitExceededMessage.REQUEST_SIZE_LIMIT_EXCEEDED

    def test_exception_without_details(self):
        error = LimitExceededException()

        assert error.limit_cause == LimitExceededMessage.UNKNOWN_LIMIT_EXCEEDED
        assert error.message == "Limit exceeded for this account"
        assert error.error_code == MomentoErrorCode.LIMIT_EXCEEDED_ERROR
