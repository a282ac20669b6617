"""
Canonical error taxonomy for the scs-client SDK.

Every failure an operation can produce is an ``SdkException`` carrying a
``MomentoErrorCode``. The kinds are flat: each subclass only pins its code
and a default message.
"""

from enum import Enum
from typing import Dict, Any, Optional

from opentelemetry import trace
from pydantic import BaseModel


class MomentoErrorCode(str, Enum):
    """Error codes surfaced to SDK callers."""

    INVALID_ARGUMENT_ERROR = "INVALID_ARGUMENT_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND_ERROR = "NOT_FOUND_ERROR"
    ALREADY_EXISTS_ERROR = "ALREADY_EXISTS_ERROR"
    LIMIT_EXCEEDED_ERROR = "LIMIT_EXCEEDED_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    SERVER_UNAVAILABLE = "SERVER_UNAVAILABLE"
    CANCELLED_ERROR = "CANCELLED_ERROR"
    UNKNOWN_SERVICE_ERROR = "UNKNOWN_SERVICE_ERROR"
    BAD_REQUEST_ERROR = "BAD_REQUEST_ERROR"
    FAILED_PRECONDITION_ERROR = "FAILED_PRECONDITION_ERROR"


class TransportErrorDetails(BaseModel):
    """What the transport reported when a call failed."""

    code: str
    details: str = ""
    metadata: Dict[str, str] = {}


class ErrorSummary(BaseModel):
    """Serializable summary of an SDK error."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class SdkException(Exception):
    """Base exception for every SDK failure."""

    def __init__(
        self,
        message: str,
        error_code: MomentoErrorCode = MomentoErrorCode.UNKNOWN_SERVICE_ERROR,
        transport_details: Optional[TransportErrorDetails] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.transport_details = transport_details
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(error_code={self.error_code.value}, message={self.message!r})"

    def to_response(self) -> ErrorSummary:
        """Convert to a serializable error summary."""
        # Get trace ID from current span
        trace_id = None
        current_span = trace.get_current_span()
        if current_span and current_span.is_recording():
            span_context = current_span.get_span_context()
            if span_context.trace_id != 0:
                trace_id = f"{span_context.trace_id:032x}"

        details = dict(self.details)
        if self.transport_details is not None:
            details["transport"] = self.transport_details.model_dump()

        return ErrorSummary(
            trace_id=trace_id,
            code=self.error_code.value,
            message=self.message,
            details=details,
        )


class InvalidArgumentException(SdkException):
    """Invalid argument passed to an SDK call."""

    def __init__(self, message: str = "Invalid argument", transport_details: Optional[TransportErrorDetails] = None):
        super().__init__(message, MomentoErrorCode.INVALID_ARGUMENT_ERROR, transport_details)


class AuthenticationException(SdkException):
    """The credential was rejected."""

    def __init__(self, message: str = "Invalid authentication credentials to connect to cache service", transport_details: Optional[TransportErrorDetails] = None):
        super().__init__(message, MomentoErrorCode.AUTHENTICATION_ERROR, transport_details)


class PermissionDeniedException(SdkException):
    """The credential lacks permission for the operation."""

    def __init__(self, message: str = "Insufficient permissions to perform an operation on a cache", transport_details: Optional[TransportErrorDetails] = None):
        super().__init__(message, MomentoErrorCode.PERMISSION_ERROR, transport_details)


class NotFoundException(SdkException):
    """The requested resource does not exist."""

    def __init__(self, message: str = "A cache with the specified name does not exist", transport_details: Optional[TransportErrorDetails] = None):
        super().__init__(message, MomentoErrorCode.NOT_FOUND_ERROR, transport_details)


class AlreadyExistsException(SdkException):
    """The resource being created already exists."""

    def __init__(self, message: str = "A cache with the specified name already exists", transport_details: Optional[TransportErrorDetails] = None):
        super().__init__(message, MomentoErrorCode.ALREADY_EXISTS_ERROR, transport_details)


class InternalServerException(SdkException):
    """The service failed unexpectedly."""

    def __init__(self, message: str = "Unexpected exception occurred while trying to fulfill the request", transport_details: Optional[TransportErrorDetails] = None):
        super().__init__(message, MomentoErrorCode.INTERNAL_SERVER_ERROR, transport_details)


class TimeoutException(SdkException):
    """The call did not complete before its deadline."""

    def __init__(self, message: str = "The client's configured timeout was exceeded", transport_details: Optional[TransportErrorDetails] = None):
        super().__init__(message, MomentoErrorCode.TIMEOUT_ERROR, transport_details)


class ServerUnavailableException(SdkException):
    """The service could not be reached."""

    def __init__(self, message: str = "The server was unable to handle the request", transport_details: Optional[TransportErrorDetails] = None):
        super().__init__(message, MomentoErrorCode.SERVER_UNAVAILABLE, transport_details)


class CancelledException(SdkException):
    """The call was cancelled before completing."""

    def __init__(self, message: str = "The request was cancelled by the server", transport_details: Optional[TransportErrorDetails] = None):
        super().__init__(message, MomentoErrorCode.CANCELLED_ERROR, transport_details)


class UnknownServiceException(SdkException):
    """The service returned a failure the SDK does not recognize."""

    def __init__(self, message: str = "Service returned an unknown response", transport_details: Optional[TransportErrorDetails] = None):
        super().__init__(message, MomentoErrorCode.UNKNOWN_SERVICE_ERROR, transport_details)


class BadRequestException(SdkException):
    """The service could not process the request as sent."""

    def __init__(self, message: str = "The request was invalid", transport_details: Optional[TransportErrorDetails] = None):
        super().__init__(message, MomentoErrorCode.BAD_REQUEST_ERROR, transport_details)


class FailedPreconditionException(SdkException):
    """The system was not in a state required for the operation."""

    def __init__(self, message: str = "System is not in a state required for the operation's execution", transport_details: Optional[TransportErrorDetails] = None):
        super().__init__(message, MomentoErrorCode.FAILED_PRECONDITION_ERROR, transport_details)


class LimitExceededMessage(str, Enum):
    """User-facing messages for each limit category."""

    TOPIC_SUBSCRIPTIONS_LIMIT_EXCEEDED = "Topic subscriptions limit exceeded for this account"
    OPERATIONS_RATE_LIMIT_EXCEEDED = "Request rate limit exceeded for this account"
    THROUGHPUT_RATE_LIMIT_EXCEEDED = "Bandwidth limit exceeded for this account"
    REQUEST_SIZE_LIMIT_EXCEEDED = "Request size limit exceeded for this account"
    ITEM_SIZE_LIMIT_EXCEEDED = "Item size limit exceeded for this account"
    ELEMENT_SIZE_LIMIT_EXCEEDED = "Element size limit exceeded for this account"
    UNKNOWN_LIMIT_EXCEEDED = "Limit exceeded for this account"


# Values the service sends in the "err" trailer.
_ERR_CAUSE_MESSAGES: Dict[str, LimitExceededMessage] = {
    "topic_subscriptions_limit_exceeded": LimitExceededMessage.TOPIC_SUBSCRIPTIONS_LIMIT_EXCEEDED,
    "operations_rate_limit_exceeded": LimitExceededMessage.OPERATIONS_RATE_LIMIT_EXCEEDED,
    "throughput_rate_limit_exceeded": LimitExceededMessage.THROUGHPUT_RATE_LIMIT_EXCEEDED,
    "request_size_limit_exceeded": LimitExceededMessage.REQUEST_SIZE_LIMIT_EXCEEDED,
    "item_size_limit_exceeded": LimitExceededMessage.ITEM_SIZE_LIMIT_EXCEEDED,
    "element_size_limit_exceeded": LimitExceededMessage.ELEMENT_SIZE_LIMIT_EXCEEDED,
}

# Checked in order; first match wins.
_DETAIL_KEYWORDS = (
    ("subscribers", LimitExceededMessage.TOPIC_SUBSCRIPTIONS_LIMIT_EXCEEDED),
    ("operations", LimitExceededMessage.OPERATIONS_RATE_LIMIT_EXCEEDED),
    ("throughput", LimitExceededMessage.THROUGHPUT_RATE_LIMIT_EXCEEDED),
    ("request limit", LimitExceededMessage.REQUEST_SIZE_LIMIT_EXCEEDED),
    ("request size", LimitExceededMessage.REQUEST_SIZE_LIMIT_EXCEEDED),
    ("item size", LimitExceededMessage.ITEM_SIZE_LIMIT_EXCEEDED),
    ("element size", LimitExceededMessage.ELEMENT_SIZE_LIMIT_EXCEEDED),
)


def determine_limit_cause(err_cause: Optional[str], details: str) -> LimitExceededMessage:
    """Pick the limit category from the err trailer, then from the detail text."""
    if err_cause:
        cause = _ERR_CAUSE_MESSAGES.get(err_cause.lower())
        if cause is not None:
            return cause

    lowered = (details or "").lower()
    for keyword, cause in _DETAIL_KEYWORDS:
        if keyword in lowered:
            return cause

    return LimitExceededMessage.UNKNOWN_LIMIT_EXCEEDED


class LimitExceededException(SdkException):
    """An account limit was exceeded."""

    def __init__(
        self,
        err_cause: Optional[str] = None,
        transport_details: Optional[TransportErrorDetails] = None,
    ):
        self.limit_cause = determine_limit_cause(
            err_cause,
            transport_details.details if transport_details else "",
        )
        super().__init__(self.limit_cause.value, MomentoErrorCode.LIMIT_EXCEEDED_ERROR, transport_details)
