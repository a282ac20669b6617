"""
Public client for the cache service.
"""

import asyncio
from datetime import timedelta
from typing import Callable, Dict, Iterable, Optional, Set

import httpx

from shared.config import Configuration
from shared.logging import get_logger
from shared.metrics import MetricsCollector, get_metrics_collector
from shared.tracing import configure_tracing
from .auth.credential_provider import CredentialProvider
from .internal.control_client import ControlClient
from .internal.data_client import Bytes, DataClient
from .internal.platform import UserAgentProvider, default_user_agent
from .internal.transport import HttpTransport, Transport
from .requests import CollectionTtl
from .responses import (
    CacheDeleteResponse,
    CacheGetResponse,
    CacheListConcatenateBackResponse,
    CacheListConcatenateFrontResponse,
    CacheListFetchResponse,
    CacheListLengthResponse,
    CacheListPopBackResponse,
    CacheListPopFrontResponse,
    CacheListPushBackResponse,
    CacheListPushFrontResponse,
    CacheListRemoveValueResponse,
    CacheListRetainResponse,
    CacheSetResponse,
    CreateCacheResponse,
    CreateSigningKeyResponse,
    DeleteCacheResponse,
    FlushCacheResponse,
    ListCachesResponse,
    ListSigningKeysResponse,
    RevokeSigningKeyResponse,
)
from . import validation

CONTROL_SERVICE = "control_client.ScsControl"
DATA_SERVICE = "cache_client.Scs"
CLIENT_TYPE = "cache"
TRACING_SERVICE_NAME = "scs-client"

# (endpoint, service, headers) -> Transport
TransportFactory = Callable[[str, str, Dict[str, str]], Transport]


def http_transport_factory(
    credential_provider: CredentialProvider,
    configuration: Configuration,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TransportFactory:
    """Factory building one ``HttpTransport`` per endpoint."""

    def factory(endpoint: str, service: str, headers: Dict[str, str]) -> Transport:
        return HttpTransport(
            endpoint,
            service,
            configuration,
            port=credential_provider.port,
            secure=credential_provider.secure,
            headers=headers,
            http_transport=http_transport,
        )

    return factory


# Pending closes scheduled from synchronous code; held until they finish.
_pending_closes: Set[asyncio.Task] = set()


def _discard_transport(transport: Transport) -> None:
    """Close a transport from synchronous code, on the running loop if there is one."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        asyncio.run(transport.close())
        return

    task = loop.create_task(transport.close())
    _pending_closes.add(task)
    task.add_done_callback(_pending_closes.discard)


class CacheClient:
    """Client for data and control operations against the cache service.

    Every operation returns a result variant and never raises for service or
    validation failures; ``Error`` variants can be raised by the caller.

    Example:
        async with CacheClient(
            CredentialProvider.from_env_var_v2(),
            Configurations.Laptop.latest(),
            default_ttl=timedelta(minutes=5),
        ) as client:
            response = await client.get("cache", "key")
            if isinstance(response, CacheGet.Hit):
                print(response.value_string)
    """

    def __init__(
        self,
        credential_provider: CredentialProvider,
        configuration: Configuration,
        default_ttl: timedelta,
        *,
        transport_factory: Optional[TransportFactory] = None,
        user_agent_provider: UserAgentProvider = default_user_agent,
        metrics: Optional[MetricsCollector] = None,
    ):
        validation.validate_ttl(default_ttl)

        self.credential_provider = credential_provider
        self.configuration = configuration
        self.default_ttl = default_ttl
        self.logger = get_logger("scs_client.cache_client")

        if configuration.enable_tracing:
            configure_tracing(TRACING_SERVICE_NAME, configuration.otlp_endpoint)
        if metrics is None and configuration.enable_metrics:
            metrics = get_metrics_collector()

        factory = transport_factory or http_transport_factory(credential_provider, configuration)
        timeout = configuration.request_timeout_seconds

        control_transport = factory(
            credential_provider.control_endpoint,
            CONTROL_SERVICE,
            self._channel_headers(user_agent_provider),
        )
        try:
            data_transport = factory(
                credential_provider.cache_endpoint,
                DATA_SERVICE,
                self._channel_headers(user_agent_provider),
            )
        except Exception:
            self.logger.warning("Could not open data channel", cache_endpoint=credential_provider.cache_endpoint)
            _discard_transport(control_transport)
            raise

        self._control_client = ControlClient(
            control_transport, credential_provider.cache_endpoint, timeout, metrics
        )
        self._data_client = DataClient(data_transport, default_ttl, timeout, metrics)

        self.logger.debug(
            "Cache client created",
            control_endpoint=credential_provider.control_endpoint,
            cache_endpoint=credential_provider.cache_endpoint,
            request_timeout_seconds=timeout,
        )

    def _channel_headers(self, user_agent_provider: UserAgentProvider) -> Dict[str, str]:
        headers = user_agent_provider(CLIENT_TYPE).headers()
        if self.credential_provider.api_key:
            headers["authorization"] = self.credential_provider.api_key
        return headers

    async def __aenter__(self) -> "CacheClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release both channels."""
        try:
            await self._data_client.close()
        finally:
            await self._control_client.close()

    # Control plane

    async def create_cache(self, cache_name: str) -> CreateCacheResponse:
        return await self._control_client.create_cache(cache_name)

    async def delete_cache(self, cache_name: str) -> DeleteCacheResponse:
        return await self._control_client.delete_cache(cache_name)

    async def flush_cache(self, cache_name: str) -> FlushCacheResponse:
        """Remove every item from a cache, keeping the cache itself."""
        return await self._control_client.flush_cache(cache_name)

    async def list_caches(self) -> ListCachesResponse:
        return await self._control_client.list_caches()

    async def create_signing_key(self, ttl: timedelta) -> CreateSigningKeyResponse:
        """Create a key for signing presigned URLs, valid for ``ttl``."""
        return await self._control_client.create_signing_key(ttl)

    async def revoke_signing_key(self, key_id: str) -> RevokeSigningKeyResponse:
        return await self._control_client.revoke_signing_key(key_id)

    async def list_signing_keys(self) -> ListSigningKeysResponse:
        return await self._control_client.list_signing_keys()

    # Scalar

    async def get(self, cache_name: str, key: Bytes) -> CacheGetResponse:
        return await self._data_client.get(cache_name, key)

    async def set(
        self,
        cache_name: str,
        key: Bytes,
        value: Bytes,
        ttl: Optional[timedelta] = None,
    ) -> CacheSetResponse:
        """Store a value; ``ttl`` defaults to the client's default TTL."""
        return await self._data_client.set(cache_name, key, value, ttl)

    async def delete(self, cache_name: str, key: Bytes) -> CacheDeleteResponse:
        return await self._data_client.delete(cache_name, key)

    # Lists

    async def list_concatenate_back(
        self,
        cache_name: str,
        list_name: str,
        values: Iterable[Bytes],
        truncate_front_to_size: Optional[int] = None,
        ttl: Optional[CollectionTtl] = None,
    ) -> CacheListConcatenateBackResponse:
        """Append values, optionally trimming the front to keep the list bounded."""
        return await self._data_client.list_concatenate_back(
            cache_name, list_name, values, truncate_front_to_size, ttl
        )

    async def list_concatenate_front(
        self,
        cache_name: str,
        list_name: str,
        values: Iterable[Bytes],
        truncate_back_to_size: Optional[int] = None,
        ttl: Optional[CollectionTtl] = None,
    ) -> CacheListConcatenateFrontResponse:
        return await self._data_client.list_concatenate_front(
            cache_name, list_name, values, truncate_back_to_size, ttl
        )

    async def list_fetch(
        self,
        cache_name: str,
        list_name: str,
        start_index: Optional[int] = None,
        end_index: Optional[int] = None,
    ) -> CacheListFetchResponse:
        """Fetch ``[start_index, end_index)``; negative indices count from the end."""
        return await self._data_client.list_fetch(cache_name, list_name, start_index, end_index)

    async def list_length(self, cache_name: str, list_name: str) -> CacheListLengthResponse:
        return await self._data_client.list_length(cache_name, list_name)

    async def list_push_back(
        self,
        cache_name: str,
        list_name: str,
        value: Bytes,
        truncate_front_to_size: Optional[int] = None,
        ttl: Optional[CollectionTtl] = None,
    ) -> CacheListPushBackResponse:
        return await self._data_client.list_push_back(
            cache_name, list_name, value, truncate_front_to_size, ttl
        )

    async def list_push_front(
        self,
        cache_name: str,
        list_name: str,
        value: Bytes,
        truncate_back_to_size: Optional[int] = None,
        ttl: Optional[CollectionTtl] = None,
    ) -> CacheListPushFrontResponse:
        return await self._data_client.list_push_front(
            cache_name, list_name, value, truncate_back_to_size, ttl
        )

    async def list_pop_back(self, cache_name: str, list_name: str) -> CacheListPopBackResponse:
        return await self._data_client.list_pop_back(cache_name, list_name)

    async def list_pop_front(self, cache_name: str, list_name: str) -> CacheListPopFrontResponse:
        return await self._data_client.list_pop_front(cache_name, list_name)

    async def list_remove_value(
        self,
        cache_name: str,
        list_name: str,
        value: Bytes,
    ) -> CacheListRemoveValueResponse:
        """Remove every element equal to ``value``."""
        return await self._data_client.list_remove_value(cache_name, list_name, value)

    async def list_retain(
        self,
        cache_name: str,
        list_name: str,
        start_index: Optional[int] = None,
        end_index: Optional[int] = None,
        ttl: Optional[CollectionTtl] = None,
    ) -> CacheListRetainResponse:
        """Keep only ``[start_index, end_index)`` and drop the rest."""
        return await self._data_client.list_retain(cache_name, list_name, start_index, end_index, ttl)
