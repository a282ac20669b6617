"""
Unit tests for the httpx transport binding.
"""

import json
from datetime import timedelta

import httpx
import pytest

from scs_client.internal import messages
from scs_client.internal.data_client import DataClient
from scs_client.internal.transport import HttpTransport, StatusCode, TransportFault, status_from_http
from scs_client.responses import CacheGet
from shared.config import Configuration


def _transport(handler, **kwargs) -> HttpTransport:
    return HttpTransport(
        "cache.example.com",
        "cache_client.Scs",
        Configuration(request_timeout_seconds=2.0),
        headers={"authorization": "secret-key", "agent": "python:cache:test"},
        http_transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestHttpTransport:
    """Test cases for HttpTransport.unary."""

    @pytest.mark.asyncio
    async def test_successful_call(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["request"] = request
            body = messages.GetResponse(result="Hit", cache_body=b"\x00value").model_dump_json()
            return httpx.Response(200, content=body, headers={"content-type": "application/json"})

        transport = _transport(handler)
        response = await transport.unary(
            "Get",
            messages.GetRequest(cache_key=b"key"),
            messages.GetResponse,
            {"cache": "my-cache"},
        )
        await transport.close()

        assert response.result == "Hit"
        assert response.cache_body == b"\x00value"
        request = captured["request"]
        assert request.method == "POST"
        assert request.url.scheme == "https"
        assert request.url.host == "cache.example.com"
        assert request.url.path == "/cache_client.Scs/Get"
        assert request.headers["authorization"] == "secret-key"
        assert request.headers["agent"] == "python:cache:test"
        assert request.headers["cache"] == "my-cache"
        sent = messages.GetRequest.model_validate_json(request.content)
        assert sent.cache_key == b"key"

    @pytest.mark.asyncio
    async def test_non_ascii_cache_name_is_sent(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["request"] = request
            return httpx.Response(200, content=messages.GetResponse(result="Miss").model_dump_json())

        transport = _transport(handler)
        client = DataClient(transport, timedelta(seconds=60), 2.0)
        result = await client.get("café", "key")
        await client.close()

        assert isinstance(result, CacheGet.Miss)
        assert (b"cache", "café".encode("utf-8")) in captured["request"].headers.raw
        assert captured["request"].headers["cache"] == "café"

    @pytest.mark.asyncio
    async def test_plaintext_port(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            return httpx.Response(200, content=b"")

        transport = _transport(handler, port=8080, secure=False)
        await transport.unary("Delete", messages.DeleteRequest(cache_key=b"k"), messages.DeleteResponse)

        assert captured["url"] == "http://cache.example.com:8080/cache_client.Scs/Delete"

    @pytest.mark.asyncio
    async def test_status_from_body_code(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"code": "FAILED_PRECONDITION", "message": "not ready"},
                headers={"err": "some_cause"},
            )

        transport = _transport(handler)
        with pytest.raises(TransportFault) as exc_info:
            await transport.unary("Get", messages.GetRequest(cache_key=b"k"), messages.GetResponse, {"cache": "c"})

        fault = exc_info.value
        assert fault.code == StatusCode.FAILED_PRECONDITION
        assert fault.details == "not ready"
        assert fault.metadata == {"cache": "c", "err": "some_cause"}

    @pytest.mark.asyncio
    async def test_status_from_http_code(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, text="slow down")

        transport = _transport(handler)
        with pytest.raises(TransportFault) as exc_info:
            await transport.unary("Get", messages.GetRequest(cache_key=b"k"), messages.GetResponse)

        assert exc_info.value.code == StatusCode.RESOURCE_EXHAUSTED
        assert exc_info.value.details == "slow down"

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        transport = _transport(handler)
        with pytest.raises(TransportFault) as exc_info:
            await transport.unary("Get", messages.GetRequest(cache_key=b"k"), messages.GetResponse)

        assert exc_info.value.code == StatusCode.DEADLINE_EXCEEDED

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = _transport(handler)
        with pytest.raises(TransportFault) as exc_info:
            await transport.unary("Get", messages.GetRequest(cache_key=b"k"), messages.GetResponse)

        assert exc_info.value.code == StatusCode.UNAVAILABLE
        assert "connection refused" in exc_info.value.details

    @pytest.mark.asyncio
    async def test_malformed_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=json.dumps({"list_length": "many"}).encode())

        transport = _transport(handler)
        with pytest.raises(TransportFault) as exc_info:
            await transport.unary(
                "ListPushBack",
                messages.ListPushBackRequest(list_name=b"l", value=b"v", ttl_milliseconds=1, refresh_ttl=True),
                messages.ListLengthWriteResponse,
            )

        assert exc_info.value.code == StatusCode.INTERNAL


class TestStatusFromHttp:
    """Test cases for HTTP status mapping."""

    @pytest.mark.parametrize("status, expected", [
        (401, StatusCode.UNAUTHENTICATED),
        (403, StatusCode.PERMISSION_DENIED),
        (404, StatusCode.NOT_FOUND),
        (503, StatusCode.UNAVAILABLE),
        (418, StatusCode.UNKNOWN),
    ])
    def test_mapping(self, status, expected):
        assert status_from_http(status) == expected
