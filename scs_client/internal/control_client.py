"""
Control plane operations: cache lifecycle and signing keys.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Optional

from shared.errors import InternalServerException
from shared.metrics import MetricsCollector
from ..responses.control import (
    CacheInfo,
    CreateCache,
    CreateCacheResponse,
    DeleteCache,
    DeleteCacheResponse,
    FlushCache,
    FlushCacheResponse,
    ListCaches,
    ListCachesResponse,
)
from ..responses.signing import (
    CreateSigningKey,
    CreateSigningKeyResponse,
    ListSigningKeys,
    ListSigningKeysResponse,
    RevokeSigningKey,
    RevokeSigningKeyResponse,
    SigningKey,
)
from .. import validation
from . import messages
from .pipeline import RequestPipeline
from .transport import Transport


def _no_validation() -> None:
    return None


def _from_epoch_seconds(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def _signing_key_id(key: str) -> str:
    """Key id (``kid``) of a JSON web key."""
    try:
        jwk = json.loads(key)
    except ValueError as e:
        raise InternalServerException("Signing key is not valid JSON") from e
    if not isinstance(jwk, dict) or not isinstance(jwk.get("kid"), str):
        raise InternalServerException("Signing key has no key id")
    return jwk["kid"]


class ControlClient:
    """Issues control plane calls through a ``RequestPipeline``.

    ``cache_endpoint`` is reported with signing keys, since keys sign
    requests sent to the data plane.
    """

    def __init__(
        self,
        transport: Transport,
        cache_endpoint: str,
        timeout_seconds: float,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.transport = transport
        self.cache_endpoint = cache_endpoint
        self.pipeline = RequestPipeline(transport, timeout_seconds, metrics)

    async def create_cache(self, cache_name: str) -> CreateCacheResponse:
        return await self.pipeline.execute(
            "create_cache",
            CreateCache.Error,
            lambda: validation.validate_cache_name(cache_name),
            lambda: messages.CreateCacheRequest(cache_name=cache_name),
            messages.Empty,
            lambda response: CreateCache.Success(),
            cache_name=cache_name,
        )

    async def delete_cache(self, cache_name: str) -> DeleteCacheResponse:
        return await self.pipeline.execute(
            "delete_cache",
            DeleteCache.Error,
            lambda: validation.validate_cache_name(cache_name),
            lambda: messages.DeleteCacheRequest(cache_name=cache_name),
            messages.Empty,
            lambda response: DeleteCache.Success(),
            cache_name=cache_name,
        )

    async def flush_cache(self, cache_name: str) -> FlushCacheResponse:
        return await self.pipeline.execute(
            "flush_cache",
            FlushCache.Error,
            lambda: validation.validate_cache_name(cache_name),
            lambda: messages.FlushCacheRequest(cache_name=cache_name),
            messages.Empty,
            lambda response: FlushCache.Success(),
            cache_name=cache_name,
        )

    async def list_caches(self) -> ListCachesResponse:
        return await self.pipeline.execute(
            "list_caches",
            ListCaches.Error,
            _no_validation,
            lambda: messages.ListCachesRequest(next_token=""),
            messages.ListCachesResponse,
            lambda response: ListCaches.Success(
                [CacheInfo(cache.cache_name) for cache in response.cache]
            ),
        )

    async def create_signing_key(self, ttl: timedelta) -> CreateSigningKeyResponse:
        def map_success(response: messages.CreateSigningKeyResponse):
            return CreateSigningKey.Success(
                key_id=_signing_key_id(response.key),
                endpoint=self.cache_endpoint,
                key=response.key,
                expires_at=_from_epoch_seconds(response.expires_at),
            )

        return await self.pipeline.execute(
            "create_signing_key",
            CreateSigningKey.Error,
            lambda: validation.validate_signing_key_ttl(ttl),
            lambda: messages.CreateSigningKeyRequest(ttl_minutes=int(ttl.total_seconds() // 60)),
            messages.CreateSigningKeyResponse,
            map_success,
        )

    async def revoke_signing_key(self, key_id: str) -> RevokeSigningKeyResponse:
        return await self.pipeline.execute(
            "revoke_signing_key",
            RevokeSigningKey.Error,
            _no_validation,
            lambda: messages.RevokeSigningKeyRequest(key_id=key_id),
            messages.Empty,
            lambda response: RevokeSigningKey.Success(),
        )

    async def list_signing_keys(self) -> ListSigningKeysResponse:
        return await self.pipeline.execute(
            "list_signing_keys",
            ListSigningKeys.Error,
            _no_validation,
            lambda: messages.ListSigningKeysRequest(next_token=""),
            messages.ListSigningKeysResponse,
            lambda response: ListSigningKeys.Success([
                SigningKey(
                    key_id=key.key_id,
                    expires_at=_from_epoch_seconds(key.expires_at),
                    endpoint=self.cache_endpoint,
                )
                for key in response.signing_key
            ]),
        )

    async def close(self) -> None:
        await self.transport.close()
