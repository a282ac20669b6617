"""Results of key-value operations."""

from dataclasses import dataclass
from typing import Union

from .base import CacheResponse, ErrorResponseBase


class CacheGet:
    """Results of ``get``."""

    @dataclass(frozen=True)
    class Hit(CacheResponse):
        value_bytes: bytes

        @property
        def value_string(self) -> str:
            return self.value_bytes.decode("utf-8")

        def __str__(self) -> str:
            return f"CacheGet.Hit(value_bytes={self.value_bytes[:32]!r}, length={len(self.value_bytes)})"

    @dataclass(frozen=True)
    class Miss(CacheResponse):
        pass

    class Error(ErrorResponseBase):
        pass


class CacheSet:
    """Results of ``set``."""

    @dataclass(frozen=True)
    class Success(CacheResponse):
        pass

    class Error(ErrorResponseBase):
        pass


class CacheDelete:
    """Results of ``delete``."""

    @dataclass(frozen=True)
    class Success(CacheResponse):
        pass

    class Error(ErrorResponseBase):
        pass


CacheGetResponse = Union[CacheGet.Hit, CacheGet.Miss, CacheGet.Error]
CacheSetResponse = Union[CacheSet.Success, CacheSet.Error]
CacheDeleteResponse = Union[CacheDelete.Success, CacheDelete.Error]
