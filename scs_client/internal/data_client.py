"""
Data plane operations: key-value and list calls against a cache.
"""

from datetime import timedelta
from typing import Iterable, List, Optional, Tuple, Union

from shared.errors import InternalServerException, InvalidArgumentException
from shared.metrics import MetricsCollector
from ..requests import CollectionTtl
from ..responses.lists import (
    CacheListConcatenateBack,
    CacheListConcatenateBackResponse,
    CacheListConcatenateFront,
    CacheListConcatenateFrontResponse,
    CacheListFetch,
    CacheListFetchResponse,
    CacheListLength,
    CacheListLengthResponse,
    CacheListPopBack,
    CacheListPopBackResponse,
    CacheListPopFront,
    CacheListPopFrontResponse,
    CacheListPushBack,
    CacheListPushBackResponse,
    CacheListPushFront,
    CacheListPushFrontResponse,
    CacheListRemoveValue,
    CacheListRemoveValueResponse,
    CacheListRetain,
    CacheListRetainResponse,
)
from ..responses.scalar import (
    CacheDelete,
    CacheDeleteResponse,
    CacheGet,
    CacheGetResponse,
    CacheSet,
    CacheSetResponse,
)
from .. import validation
from . import messages
from .pipeline import RequestPipeline
from .transport import Transport

Bytes = Union[str, bytes]


def to_bytes(value: Bytes) -> bytes:
    """UTF-8 encode strings; pass bytes through."""
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def _ttl_milliseconds(ttl: timedelta) -> int:
    return ttl // timedelta(milliseconds=1)


def _value_list(values: Iterable[Bytes]) -> Optional[List[Bytes]]:
    """Materialize a values argument; None when it is not a collection."""
    if values is None or isinstance(values, (str, bytes)):
        return None
    try:
        return list(values)
    except TypeError:
        return None


def _validate_values(values: Optional[List[Bytes]]) -> None:
    if values is None:
        raise InvalidArgumentException("A collection of str or bytes values is required")
    for value in values:
        validation.validate_value(value)


class DataClient:
    """Issues data plane calls through a ``RequestPipeline``."""

    def __init__(
        self,
        transport: Transport,
        default_ttl: timedelta,
        timeout_seconds: float,
        metrics: Optional[MetricsCollector] = None,
    ):
        validation.validate_ttl(default_ttl)
        self.default_ttl = default_ttl
        self.transport = transport
        self.pipeline = RequestPipeline(transport, timeout_seconds, metrics)

    def _item_ttl(self, ttl: Optional[timedelta]) -> timedelta:
        return ttl if ttl is not None else self.default_ttl

    def _collection_ttl(self, ttl: Optional[CollectionTtl]) -> Tuple[timedelta, bool]:
        """Effective duration and refresh flag for a collection write.

        A ``ttl`` of the wrong type is rejected by ``validate_collection_ttl``
        before these values are used.
        """
        collection_ttl = ttl if isinstance(ttl, CollectionTtl) else CollectionTtl.of(self.default_ttl)
        duration = collection_ttl.ttl if collection_ttl.ttl is not None else self.default_ttl
        return duration, collection_ttl.refresh_ttl

    # Scalar

    async def get(self, cache_name: str, key: Bytes) -> CacheGetResponse:
        def validate():
            validation.validate_cache_name(cache_name)
            validation.validate_value(key)

        def map_success(response: messages.GetResponse):
            if response.result == messages.ECacheResult.HIT:
                return CacheGet.Hit(response.cache_body)
            if response.result == messages.ECacheResult.MISS:
                return CacheGet.Miss()
            raise InternalServerException(f"Unsupported cache Get result: {response.result}")

        return await self.pipeline.execute(
            "get",
            CacheGet.Error,
            validate,
            lambda: messages.GetRequest(cache_key=to_bytes(key)),
            messages.GetResponse,
            map_success,
            cache_name=cache_name,
        )

    async def set(
        self,
        cache_name: str,
        key: Bytes,
        value: Bytes,
        ttl: Optional[timedelta] = None,
    ) -> CacheSetResponse:
        item_ttl = self._item_ttl(ttl)

        def validate():
            validation.validate_cache_name(cache_name)
            validation.validate_value(key)
            validation.validate_value(value)
            validation.validate_ttl(item_ttl)

        return await self.pipeline.execute(
            "set",
            CacheSet.Error,
            validate,
            lambda: messages.SetRequest(
                cache_key=to_bytes(key),
                cache_body=to_bytes(value),
                ttl_milliseconds=_ttl_milliseconds(item_ttl),
            ),
            messages.SetResponse,
            lambda response: CacheSet.Success(),
            cache_name=cache_name,
        )

    async def delete(self, cache_name: str, key: Bytes) -> CacheDeleteResponse:
        def validate():
            validation.validate_cache_name(cache_name)
            validation.validate_value(key)

        return await self.pipeline.execute(
            "delete",
            CacheDelete.Error,
            validate,
            lambda: messages.DeleteRequest(cache_key=to_bytes(key)),
            messages.DeleteResponse,
            lambda response: CacheDelete.Success(),
            cache_name=cache_name,
        )

    # Lists

    async def list_concatenate_back(
        self,
        cache_name: str,
        list_name: str,
        values: Iterable[Bytes],
        truncate_front_to_size: Optional[int] = None,
        ttl: Optional[CollectionTtl] = None,
    ) -> CacheListConcatenateBackResponse:
        values = _value_list(values)
        duration, refresh = self._collection_ttl(ttl)

        def validate():
            validation.validate_cache_name(cache_name)
            validation.validate_list_name(list_name)
            _validate_values(values)
            validation.validate_truncate_to_size(truncate_front_to_size)
            validation.validate_collection_ttl(ttl)
            validation.validate_ttl(duration)

        return await self.pipeline.execute(
            "list_concatenate_back",
            CacheListConcatenateBack.Error,
            validate,
            lambda: messages.ListConcatenateBackRequest(
                list_name=to_bytes(list_name),
                values=[to_bytes(value) for value in values],
                ttl_milliseconds=_ttl_milliseconds(duration),
                refresh_ttl=refresh,
                truncate_front_to_size=truncate_front_to_size or 0,
            ),
            messages.ListLengthWriteResponse,
            lambda response: CacheListConcatenateBack.Success(response.list_length),
            cache_name=cache_name,
        )

    async def list_concatenate_front(
        self,
        cache_name: str,
        list_name: str,
        values: Iterable[Bytes],
        truncate_back_to_size: Optional[int] = None,
        ttl: Optional[CollectionTtl] = None,
    ) -> CacheListConcatenateFrontResponse:
        values = _value_list(values)
        duration, refresh = self._collection_ttl(ttl)

        def validate():
            validation.validate_cache_name(cache_name)
            validation.validate_list_name(list_name)
            _validate_values(values)
            validation.validate_truncate_to_size(truncate_back_to_size)
            validation.validate_collection_ttl(ttl)
            validation.validate_ttl(duration)

        return await self.pipeline.execute(
            "list_concatenate_front",
            CacheListConcatenateFront.Error,
            validate,
            lambda: messages.ListConcatenateFrontRequest(
                list_name=to_bytes(list_name),
                values=[to_bytes(value) for value in values],
                ttl_milliseconds=_ttl_milliseconds(duration),
                refresh_ttl=refresh,
                truncate_back_to_size=truncate_back_to_size or 0,
            ),
            messages.ListLengthWriteResponse,
            lambda response: CacheListConcatenateFront.Success(response.list_length),
            cache_name=cache_name,
        )

    async def list_fetch(
        self,
        cache_name: str,
        list_name: str,
        start_index: Optional[int] = None,
        end_index: Optional[int] = None,
    ) -> CacheListFetchResponse:
        def validate():
            validation.validate_cache_name(cache_name)
            validation.validate_list_name(list_name)
            validation.validate_index_range(start_index, end_index)

        def map_success(response: messages.ListFetchResponse):
            if response.found is not None:
                return CacheListFetch.Hit(list(response.found.values))
            if response.missing is not None:
                return CacheListFetch.Miss()
            raise InternalServerException("Unsupported list fetch result: neither found nor missing")

        return await self.pipeline.execute(
            "list_fetch",
            CacheListFetch.Error,
            validate,
            lambda: messages.ListFetchRequest(
                list_name=to_bytes(list_name),
                inclusive_start=start_index,
                exclusive_end=end_index,
            ),
            messages.ListFetchResponse,
            map_success,
            cache_name=cache_name,
        )

    async def list_length(self, cache_name: str, list_name: str) -> CacheListLengthResponse:
        def validate():
            validation.validate_cache_name(cache_name)
            validation.validate_list_name(list_name)

        def map_success(response: messages.ListLengthResponse):
            if response.found is not None:
                return CacheListLength.Hit(response.found.length)
            if response.missing is not None:
                return CacheListLength.Miss()
            raise InternalServerException("Unsupported list length result: neither found nor missing")

        return await self.pipeline.execute(
            "list_length",
            CacheListLength.Error,
            validate,
            lambda: messages.ListLengthRequest(list_name=to_bytes(list_name)),
            messages.ListLengthResponse,
            map_success,
            cache_name=cache_name,
        )

    async def list_push_back(
        self,
        cache_name: str,
        list_name: str,
        value: Bytes,
        truncate_front_to_size: Optional[int] = None,
        ttl: Optional[CollectionTtl] = None,
    ) -> CacheListPushBackResponse:
        duration, refresh = self._collection_ttl(ttl)

        def validate():
            validation.validate_cache_name(cache_name)
            validation.validate_list_name(list_name)
            validation.validate_value(value)
            validation.validate_truncate_to_size(truncate_front_to_size)
            validation.validate_collection_ttl(ttl)
            validation.validate_ttl(duration)

        return await self.pipeline.execute(
            "list_push_back",
            CacheListPushBack.Error,
            validate,
            lambda: messages.ListPushBackRequest(
                list_name=to_bytes(list_name),
                value=to_bytes(value),
                ttl_milliseconds=_ttl_milliseconds(duration),
                refresh_ttl=refresh,
                truncate_front_to_size=truncate_front_to_size or 0,
            ),
            messages.ListLengthWriteResponse,
            lambda response: CacheListPushBack.Success(response.list_length),
            cache_name=cache_name,
        )

    async def list_push_front(
        self,
        cache_name: str,
        list_name: str,
        value: Bytes,
        truncate_back_to_size: Optional[int] = None,
        ttl: Optional[CollectionTtl] = None,
    ) -> CacheListPushFrontResponse:
        duration, refresh = self._collection_ttl(ttl)

        def validate():
            validation.validate_cache_name(cache_name)
            validation.validate_list_name(list_name)
            validation.validate_value(value)
            validation.validate_truncate_to_size(truncate_back_to_size)
            validation.validate_collection_ttl(ttl)
            validation.validate_ttl(duration)

        return await self.pipeline.execute(
            "list_push_front",
            CacheListPushFront.Error,
            validate,
            lambda: messages.ListPushFrontRequest(
                list_name=to_bytes(list_name),
                value=to_bytes(value),
                ttl_milliseconds=_ttl_milliseconds(duration),
                refresh_ttl=refresh,
                truncate_back_to_size=truncate_back_to_size or 0,
            ),
            messages.ListLengthWriteResponse,
            lambda response: CacheListPushFront.Success(response.list_length),
            cache_name=cache_name,
        )

    async def list_pop_back(self, cache_name: str, list_name: str) -> CacheListPopBackResponse:
        return await self._list_pop(
            "list_pop_back",
            CacheListPopBack,
            messages.ListPopBackRequest,
            cache_name,
            list_name,
        )

    async def list_pop_front(self, cache_name: str, list_name: str) -> CacheListPopFrontResponse:
        return await self._list_pop(
            "list_pop_front",
            CacheListPopFront,
            messages.ListPopFrontRequest,
            cache_name,
            list_name,
        )

    async def _list_pop(self, operation: str, family, request_type, cache_name: str, list_name: str):
        def validate():
            validation.validate_cache_name(cache_name)
            validation.validate_list_name(list_name)

        def map_success(response: messages.ListPopResponse):
            if response.found is not None:
                return family.Hit(response.found.value)
            if response.missing is not None:
                return family.Miss()
            raise InternalServerException("Unsupported list pop result: neither found nor missing")

        return await self.pipeline.execute(
            operation,
            family.Error,
            validate,
            lambda: request_type(list_name=to_bytes(list_name)),
            messages.ListPopResponse,
            map_success,
            cache_name=cache_name,
        )

    async def list_remove_value(
        self,
        cache_name: str,
        list_name: str,
        value: Bytes,
    ) -> CacheListRemoveValueResponse:
        def validate():
            validation.validate_cache_name(cache_name)
            validation.validate_list_name(list_name)
            validation.validate_value(value)

        return await self.pipeline.execute(
            "list_remove_value",
            CacheListRemoveValue.Error,
            validate,
            lambda: messages.ListRemoveRequest(
                list_name=to_bytes(list_name),
                all_elements_with_value=to_bytes(value),
            ),
            messages.ListRemoveResponse,
            lambda response: CacheListRemoveValue.Success(),
            cache_name=cache_name,
        )

    async def list_retain(
        self,
        cache_name: str,
        list_name: str,
        start_index: Optional[int] = None,
        end_index: Optional[int] = None,
        ttl: Optional[CollectionTtl] = None,
    ) -> CacheListRetainResponse:
        duration, refresh = self._collection_ttl(ttl)

        def validate():
            validation.validate_cache_name(cache_name)
            validation.validate_list_name(list_name)
            validation.validate_index_range(start_index, end_index)
            validation.validate_collection_ttl(ttl)
            validation.validate_ttl(duration)

        return await self.pipeline.execute(
            "list_retain",
            CacheListRetain.Error,
            validate,
            lambda: messages.ListRetainRequest(
                list_name=to_bytes(list_name),
                inclusive_start=start_index,
                exclusive_end=end_index,
                ttl_milliseconds=_ttl_milliseconds(duration),
                refresh_ttl=refresh,
            ),
            messages.ListRetainResponse,
            lambda response: CacheListRetain.Success(),
            cache_name=cache_name,
        )

    async def close(self) -> None:
        await self.transport.close()
