"""
Transport boundary between the request pipeline and the network.

A ``Transport`` performs one unary call: it sends a request message and
returns the decoded response, or raises ``TransportFault``. ``HttpTransport``
binds calls to JSON over HTTP with httpx, one ``AsyncClient`` per endpoint.
"""

from enum import Enum
from typing import Dict, Optional, Protocol, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from shared.config import Configuration
from shared.logging import get_logger

ResponseT = TypeVar("ResponseT", bound=BaseModel)

ERR_METADATA_KEY = "err"


class StatusCode(Enum):
    """Status codes a transport can report, named as in gRPC."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


HTTP_STATUS_CODES: Dict[int, StatusCode] = {
    400: StatusCode.INVALID_ARGUMENT,
    401: StatusCode.UNAUTHENTICATED,
    403: StatusCode.PERMISSION_DENIED,
    404: StatusCode.NOT_FOUND,
    409: StatusCode.ALREADY_EXISTS,
    412: StatusCode.FAILED_PRECONDITION,
    429: StatusCode.RESOURCE_EXHAUSTED,
    499: StatusCode.CANCELLED,
    500: StatusCode.INTERNAL,
    501: StatusCode.UNIMPLEMENTED,
    503: StatusCode.UNAVAILABLE,
    504: StatusCode.DEADLINE_EXCEEDED,
}


class TransportFault(Exception):
    """A call that the transport or the service failed."""

    def __init__(self, code: StatusCode, details: str = "", metadata: Optional[Dict[str, str]] = None):
        self.code = code
        self.details = details
        self.metadata = dict(metadata or {})
        super().__init__(f"{code.name}: {details}")


class Transport(Protocol):
    """What the request pipeline needs from the network."""

    async def unary(
        self,
        method: str,
        request: BaseModel,
        response_type: Type[ResponseT],
        metadata: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> ResponseT:
        ...

    async def close(self) -> None:
        ...


def status_from_http(status_code: int) -> StatusCode:
    return HTTP_STATUS_CODES.get(status_code, StatusCode.UNKNOWN)


def _encode_metadata(metadata: Dict[str, str]) -> Dict[str, bytes]:
    """UTF-8 header values; cache names are not limited to ASCII."""
    return {key: value.encode("utf-8") for key, value in metadata.items()}


class HttpTransport:
    """Unary calls as ``POST /{service}/{method}`` with JSON bodies."""

    def __init__(
        self,
        endpoint: str,
        service: str,
        configuration: Configuration,
        *,
        port: int = 443,
        secure: bool = True,
        headers: Optional[Dict[str, str]] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        scheme = "https" if secure else "http"
        self.base_url = f"{scheme}://{endpoint}:{port}"
        self.service = service
        self.logger = get_logger("scs_client.transport")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=httpx.Timeout(
                configuration.request_timeout_seconds,
                connect=configuration.connect_timeout_seconds,
            ),
            limits=httpx.Limits(
                max_connections=configuration.max_connections,
                max_keepalive_connections=configuration.max_keepalive_connections,
                keepalive_expiry=configuration.keepalive_expiry_seconds,
            ),
            transport=http_transport,
        )

    async def unary(
        self,
        method: str,
        request: BaseModel,
        response_type: Type[ResponseT],
        metadata: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> ResponseT:
        metadata = metadata or {}
        try:
            response = await self._client.post(
                f"/{self.service}/{method}",
                content=request.model_dump_json(),
                headers={"content-type": "application/json", **_encode_metadata(metadata)},
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.TimeoutException as e:
            raise TransportFault(StatusCode.DEADLINE_EXCEEDED, str(e) or "Deadline exceeded", metadata) from e
        except httpx.TransportError as e:
            raise TransportFault(StatusCode.UNAVAILABLE, str(e) or type(e).__name__, metadata) from e

        if not response.is_success:
            raise self._fault_from_response(response, metadata)

        try:
            return response_type.model_validate_json(response.content or b"{}")
        except ValidationError as e:
            self.logger.warning(
                "Malformed response body",
                method=method,
                errors=e.error_count(),
            )
            raise TransportFault(StatusCode.INTERNAL, "Malformed response body", metadata) from e

    def _fault_from_response(self, response: httpx.Response, metadata: Dict[str, str]) -> TransportFault:
        """Status from the body's ``code`` when it names one, else from the HTTP status."""
        code = status_from_http(response.status_code)
        details = response.reason_phrase

        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            named = body.get("code")
            if isinstance(named, str) and named.upper() in StatusCode.__members__:
                code = StatusCode[named.upper()]
            if body.get("message"):
                details = str(body["message"])
        elif response.text:
            details = response.text

        fault_metadata = dict(metadata)
        err = response.headers.get(ERR_METADATA_KEY)
        if err:
            fault_metadata[ERR_METADATA_KEY] = err

        return TransportFault(code, details, fault_metadata)

    async def close(self) -> None:
        await self._client.aclose()
