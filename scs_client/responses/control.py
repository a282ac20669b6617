"""Results of cache administration operations."""

from dataclasses import dataclass, field
from typing import List, Union

from .base import CacheResponse, ErrorResponseBase

# Names shown by ListCaches.Success.__str__ before eliding the rest.
_DISPLAYED_CACHE_NAMES = 5


@dataclass(frozen=True)
class CacheInfo:
    """A cache visible to the credential."""

    name: str


class CreateCache:
    @dataclass(frozen=True)
    class Success(CacheResponse):
        pass

    class Error(ErrorResponseBase):
        pass


class DeleteCache:
    @dataclass(frozen=True)
    class Success(CacheResponse):
        pass

    class Error(ErrorResponseBase):
        pass


class FlushCache:
    @dataclass(frozen=True)
    class Success(CacheResponse):
        pass

    class Error(ErrorResponseBase):
        pass


class ListCaches:
    """Results of ``list_caches``."""

    @dataclass(frozen=True)
    class Success(CacheResponse):
        caches: List[CacheInfo] = field(default_factory=list)

        @property
        def cache_names(self) -> List[str]:
            return [cache.name for cache in self.caches]

        def __str__(self) -> str:
            names = self.cache_names
            shown = ", ".join(names[:_DISPLAYED_CACHE_NAMES])
            if len(names) > _DISPLAYED_CACHE_NAMES:
                shown += ", ..."
            return f"ListCaches.Success(caches=[{shown}])"

    class Error(ErrorResponseBase):
        pass


CreateCacheResponse = Union[CreateCache.Success, CreateCache.Error]
DeleteCacheResponse = Union[DeleteCache.Success, DeleteCache.Error]
FlushCacheResponse = Union[FlushCache.Success, FlushCache.Error]
ListCachesResponse = Union[ListCaches.Success, ListCaches.Error]
