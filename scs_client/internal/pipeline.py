"""
The request pipeline every SDK operation runs through.

    VALIDATE -> BUILD_REQUEST -> DISPATCH -> MAP_SUCCESS

Any failure along the way becomes the operation's ``Error`` variant. Only
cancellation of the awaiting task escapes.
"""

import time
from typing import Callable, Dict, Optional, Type, TypeVar

from pydantic import BaseModel

from shared.errors import InternalServerException, InvalidArgumentException, SdkException
from shared.logging import bind_call, get_logger, unbind_call
from shared.metrics import MetricsCollector
from shared.tracing import mark_span_error, trace_operation
from ..responses.base import CacheResponse, ErrorResponseBase
from .error_mapper import convert
from .transport import Transport

ResponseT = TypeVar("ResponseT", bound=BaseModel)

CACHE_METADATA_KEY = "cache"


def method_name(operation: str) -> str:
    """RPC method for an operation, e.g. ``list_push_back`` -> ``ListPushBack``."""
    return "".join(part.capitalize() for part in operation.split("_"))


class RequestPipeline:
    """Runs operations against one transport."""

    def __init__(
        self,
        transport: Transport,
        timeout_seconds: float,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.transport = transport
        self.timeout_seconds = timeout_seconds
        self.metrics = metrics
        self.logger = get_logger("scs_client.pipeline")

    async def execute(
        self,
        operation: str,
        error_type: Type[ErrorResponseBase],
        validate: Callable[[], None],
        build_request: Callable[[], BaseModel],
        response_type: Type[ResponseT],
        map_success: Callable[[ResponseT], CacheResponse],
        cache_name: Optional[str] = None,
    ) -> CacheResponse:
        """Run one call and return its result variant.

        Args:
            operation: Operation name used for logs, metrics and spans.
            error_type: The operation's ``Error`` variant.
            validate: Raises ``SdkException`` when arguments are invalid.
            build_request: Builds the wire request.
            response_type: Wire response model.
            map_success: Projects the response into a success variant.
            cache_name: Sent as call metadata when the call targets a cache.
        """
        tokens = bind_call(operation)
        start_time = time.perf_counter()
        try:
            result = await self._run(
                operation, error_type, validate, build_request, response_type, map_success, cache_name
            )
        finally:
            unbind_call(tokens)

        self._record(operation, result, time.perf_counter() - start_time)
        return result

    async def _run(
        self,
        operation: str,
        error_type: Type[ErrorResponseBase],
        validate: Callable[[], None],
        build_request: Callable[[], BaseModel],
        response_type: Type[ResponseT],
        map_success: Callable[[ResponseT], CacheResponse],
        cache_name: Optional[str],
    ) -> CacheResponse:
        try:
            validate()
        except SdkException as e:
            self.logger.debug("Request failed validation", error=e.message)
            return error_type(e)
        except (TypeError, ValueError) as e:
            self.logger.debug("Request failed validation", error=str(e))
            return error_type(InvalidArgumentException(str(e)))

        try:
            request = build_request()
        except SdkException as e:
            return error_type(e)
        except (TypeError, ValueError) as e:
            self.logger.debug("Could not build request", error=str(e))
            return error_type(InvalidArgumentException(str(e)))

        method = method_name(operation)
        metadata: Dict[str, str] = {}
        if cache_name is not None:
            metadata[CACHE_METADATA_KEY] = cache_name

        self.logger.debug("Dispatching request", method=method, cache=cache_name)
        with trace_operation(
            f"scs_client.{operation}",
            **{"rpc.method": method, "scs.cache": cache_name},
        ) as span:
            try:
                response = await self.transport.unary(
                    method, request, response_type, metadata, self.timeout_seconds
                )
            except Exception as e:
                error = convert(e, metadata)
                self.logger.warning(
                    "Request failed",
                    method=method,
                    cache=cache_name,
                    error_code=error.error_code.value,
                    error=error.message,
                )
                mark_span_error(span, error.error_code.value, error.message)
                return error_type(error)

            try:
                return map_success(response)
            except SdkException as e:
                mark_span_error(span, e.error_code.value, e.message)
                return error_type(e)
            except (KeyError, TypeError, ValueError) as e:
                error = InternalServerException(f"Malformed {method} response: {e}")
                mark_span_error(span, error.error_code.value, error.message)
                return error_type(error)

    def _record(self, operation: str, result: CacheResponse, duration: float) -> None:
        if self.metrics is None:
            return
        if isinstance(result, ErrorResponseBase):
            self.metrics.record_request(operation, "error", duration)
            self.metrics.record_error(operation, result.error_code.value)
        else:
            self.metrics.record_request(operation, type(result).__name__.lower(), duration)
