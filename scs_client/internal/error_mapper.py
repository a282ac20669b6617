"""
Maps any failure raised while dispatching a call onto the SDK error taxonomy.

``convert`` is total: every input yields exactly one ``SdkException``.
"""

from typing import Callable, Dict, Optional

from shared.errors import (
    AlreadyExistsException,
    AuthenticationException,
    BadRequestException,
    CancelledException,
    FailedPreconditionException,
    InternalServerException,
    InvalidArgumentException,
    LimitExceededException,
    NotFoundException,
    PermissionDeniedException,
    SdkException,
    ServerUnavailableException,
    TimeoutException,
    TransportErrorDetails,
    UnknownServiceException,
)
from .transport import ERR_METADATA_KEY, StatusCode, TransportFault

_StatusMapper = Callable[[TransportFault, TransportErrorDetails], SdkException]


def _with_details(exception_type) -> _StatusMapper:
    return lambda fault, details: exception_type(transport_details=details)


def _limit_exceeded(fault: TransportFault, details: TransportErrorDetails) -> SdkException:
    return LimitExceededException(fault.metadata.get(ERR_METADATA_KEY), details)


_STATUS_MAPPERS: Dict[StatusCode, _StatusMapper] = {
    StatusCode.INVALID_ARGUMENT: _with_details(InvalidArgumentException),
    StatusCode.UNIMPLEMENTED: _with_details(BadRequestException),
    StatusCode.OUT_OF_RANGE: _with_details(BadRequestException),
    StatusCode.FAILED_PRECONDITION: _with_details(FailedPreconditionException),
    StatusCode.UNAUTHENTICATED: _with_details(AuthenticationException),
    StatusCode.PERMISSION_DENIED: _with_details(PermissionDeniedException),
    StatusCode.NOT_FOUND: _with_details(NotFoundException),
    StatusCode.ALREADY_EXISTS: _with_details(AlreadyExistsException),
    StatusCode.RESOURCE_EXHAUSTED: _limit_exceeded,
    StatusCode.ABORTED: _with_details(InternalServerException),
    StatusCode.INTERNAL: _with_details(InternalServerException),
    StatusCode.DATA_LOSS: _with_details(InternalServerException),
    StatusCode.DEADLINE_EXCEEDED: _with_details(TimeoutException),
    StatusCode.UNAVAILABLE: _with_details(ServerUnavailableException),
    StatusCode.CANCELLED: _with_details(CancelledException),
}


def convert(exc: BaseException, metadata: Optional[Dict[str, str]] = None) -> SdkException:
    """Map a dispatch failure to an ``SdkException``.

    Args:
        exc: Whatever the transport raised.
        metadata: Call metadata to record when the fault carries none.
    """
    if isinstance(exc, SdkException):
        return exc

    if isinstance(exc, TransportFault):
        details = TransportErrorDetails(
            code=exc.code.name,
            details=exc.details,
            metadata={**(metadata or {}), **exc.metadata},
        )
        mapper = _STATUS_MAPPERS.get(exc.code, _with_details(UnknownServiceException))
        return mapper(exc, details)

    return UnknownServiceException(
        f"Unexpected exception occurred while trying to fulfill the request: {exc}"
    )
