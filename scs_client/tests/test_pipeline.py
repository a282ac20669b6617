"""
Unit tests for the request pipeline.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from prometheus_client import CollectorRegistry

from scs_client.internal import messages
from scs_client.internal.pipeline import RequestPipeline, method_name
from scs_client.responses import CacheGet
from shared.errors import InvalidArgumentException, MomentoErrorCode
from shared.logging import call_id_var, operation_var
from shared.metrics import MetricsCollector
from shared.test_helpers import RecordingTransport


def _no_validation():
    return None


def _get_request():
    return messages.GetRequest(cache_key=b"key")


class TestMethodName:
    """Test cases for operation to method naming."""

    @pytest.mark.parametrize("operation, expected", [
        ("get", "Get"),
        ("list_push_back", "ListPushBack"),
        ("create_signing_key", "CreateSigningKey"),
    ])
    def test_method_name(self, operation, expected):
        assert method_name(operation) == expected


class TestRequestPipeline:
    """Test cases for RequestPipeline.execute."""

    @pytest.fixture
    def metrics(self):
        return MetricsCollector(registry=CollectorRegistry())

    @pytest.fixture
    def transport(self):
        return RecordingTransport({"Get": messages.GetResponse(result="Hit", cache_body=b"v")})

    @pytest.fixture
    def pipeline(self, transport, metrics):
        return RequestPipeline(transport, 5.0, metrics)

    @pytest.mark.asyncio
    async def test_success_records_metrics(self, pipeline, metrics):
        result = await pipeline.execute(
            "get",
            CacheGet.Error,
            _no_validation,
            _get_request,
            messages.GetResponse,
            lambda response: CacheGet.Hit(response.cache_body),
            cache_name="cache",
        )

        assert result == CacheGet.Hit(b"v")
        requests_total = metrics.registry.get_sample_value(
            "scs_client_requests_total", {"operation": "get", "outcome": "hit"}
        )
        assert requests_total == 1.0

    @pytest.mark.asyncio
    async def test_validation_failure_records_error(self, pipeline, transport, metrics):
        def validate():
            raise InvalidArgumentException("Non-empty cache name is required")

        result = await pipeline.execute(
            "get", CacheGet.Error, validate, _get_request, messages.GetResponse, CacheGet.Hit
        )

        assert isinstance(result, CacheGet.Error)
        assert transport.call_count == 0
        errors_total = metrics.registry.get_sample_value(
            "scs_client_errors_total", {"operation": "get", "error_code": "INVALID_ARGUMENT_ERROR"}
        )
        assert errors_total == 1.0

    @pytest.mark.asyncio
    async def test_type_error_in_validation_is_invalid_argument(self, pipeline, transport):
        def validate():
            return None < 0

        result = await pipeline.execute(
            "get", CacheGet.Error, validate, _get_request, messages.GetResponse, CacheGet.Hit
        )

        assert isinstance(result, CacheGet.Error)
        assert result.error_code == MomentoErrorCode.INVALID_ARGUMENT_ERROR
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_build_failure_is_invalid_argument(self, pipeline, transport):
        def build():
            return messages.GetRequest(cache_key=None)

        result = await pipeline.execute(
            "get", CacheGet.Error, _no_validation, build, messages.GetResponse, CacheGet.Hit
        )

        assert result.error_code == MomentoErrorCode.INVALID_ARGUMENT_ERROR
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_malformed_response_is_internal_error(self, pipeline):
        def map_success(response):
            raise KeyError("found")

        result = await pipeline.execute(
            "get", CacheGet.Error, _no_validation, _get_request, messages.GetResponse, map_success
        )

        assert isinstance(result, CacheGet.Error)
        assert result.error_code == MomentoErrorCode.INTERNAL_SERVER_ERROR

    @pytest.mark.asyncio
    async def test_unexpected_transport_exception(self, metrics):
        transport = MagicMock()
        transport.unary = AsyncMock(side_effect=RuntimeError("socket exploded"))
        pipeline = RequestPipeline(transport, 5.0, metrics)

        result = await pipeline.execute(
            "get", CacheGet.Error, _no_validation, _get_request, messages.GetResponse, CacheGet.Hit
        )

        assert result.error_code == MomentoErrorCode.UNKNOWN_SERVICE_ERROR
        transport.unary.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        transport = MagicMock()
        transport.unary = AsyncMock(side_effect=asyncio.CancelledError())
        pipeline = RequestPipeline(transport, 5.0)

        with pytest.raises(asyncio.CancelledError):
            await pipeline.execute(
                "get", CacheGet.Error, _no_validation, _get_request, messages.GetResponse, CacheGet.Hit
            )

    @pytest.mark.asyncio
    async def test_call_context_is_bound_during_dispatch(self):
        seen = {}

        class ContextTransport(RecordingTransport):
            async def unary(self, method, request, response_type, metadata=None, timeout=None):
                seen["call_id"] = call_id_var.get()
                seen["operation"] = operation_var.get()
                return messages.GetResponse(result="Miss")

        pipeline = RequestPipeline(ContextTransport(), 5.0)

        await pipeline.execute(
            "get", CacheGet.Error, _no_validation, _get_request, messages.GetResponse,
            lambda response: CacheGet.Miss(),
        )

        assert seen["operation"] == "get"
        assert seen["call_id"]
        assert call_id_var.get() is None
        assert operation_var.get() is None

    @pytest.mark.asyncio
    async def test_no_cache_metadata_without_cache_name(self, pipeline, transport):
        await pipeline.execute(
            "get", CacheGet.Error, _no_validation, _get_request, messages.GetResponse,
            lambda response: CacheGet.Hit(response.cache_body),
        )

        assert transport.last_call.metadata == {}
        assert transport.last_call.timeout == 5.0
