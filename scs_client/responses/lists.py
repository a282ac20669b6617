"""Results of list operations."""

from dataclasses import dataclass
from typing import List, Union

from .base import CacheResponse, ErrorResponseBase


@dataclass(frozen=True)
class _LengthSuccess(CacheResponse):
    """Write that reports the list's length afterwards."""

    list_length: int


@dataclass(frozen=True)
class _ValueHit(CacheResponse):
    value_bytes: bytes

    @property
    def value_string(self) -> str:
        return self.value_bytes.decode("utf-8")


class CacheListConcatenateBack:
    class Success(_LengthSuccess):
        pass

    class Error(ErrorResponseBase):
        pass


class CacheListConcatenateFront:
    class Success(_LengthSuccess):
        pass

    class Error(ErrorResponseBase):
        pass


class CacheListPushBack:
    class Success(_LengthSuccess):
        pass

    class Error(ErrorResponseBase):
        pass


class CacheListPushFront:
    class Success(_LengthSuccess):
        pass

    class Error(ErrorResponseBase):
        pass


class CacheListFetch:
    """Results of ``list_fetch``."""

    @dataclass(frozen=True)
    class Hit(CacheResponse):
        value_list_bytes: List[bytes]

        @property
        def value_list_string(self) -> List[str]:
            return [value.decode("utf-8") for value in self.value_list_bytes]

        def __str__(self) -> str:
            return f"CacheListFetch.Hit(length={len(self.value_list_bytes)})"

    @dataclass(frozen=True)
    class Miss(CacheResponse):
        pass

    class Error(ErrorResponseBase):
        pass


class CacheListLength:
    """Results of ``list_length``."""

    @dataclass(frozen=True)
    class Hit(CacheResponse):
        length: int

    @dataclass(frozen=True)
    class Miss(CacheResponse):
        pass

    class Error(ErrorResponseBase):
        pass


class CacheListPopBack:
    class Hit(_ValueHit):
        pass

    @dataclass(frozen=True)
    class Miss(CacheResponse):
        pass

    class Error(ErrorResponseBase):
        pass


class CacheListPopFront:
    class Hit(_ValueHit):
        pass

    @dataclass(frozen=True)
    class Miss(CacheResponse):
        pass

    class Error(ErrorResponseBase):
        pass


class CacheListRemoveValue:
    @dataclass(frozen=True)
    class Success(CacheResponse):
        pass

    class Error(ErrorResponseBase):
        pass


class CacheListRetain:
    @dataclass(frozen=True)
    class Success(CacheResponse):
        pass

    class Error(ErrorResponseBase):
        pass


CacheListConcatenateBackResponse = Union[CacheListConcatenateBack.Success, CacheListConcatenateBack.Error]
CacheListConcatenateFrontResponse = Union[CacheListConcatenateFront.Success, CacheListConcatenateFront.Error]
CacheListPushBackResponse = Union[CacheListPushBack.Success, CacheListPushBack.Error]
CacheListPushFrontResponse = Union[CacheListPushFront.Success, CacheListPushFront.Error]
CacheListFetchResponse = Union[CacheListFetch.Hit, CacheListFetch.Miss, CacheListFetch.Error]
CacheListLengthResponse = Union[CacheListLength.Hit, CacheListLength.Miss, CacheListLength.Error]
CacheListPopBackResponse = Union[CacheListPopBack.Hit, CacheListPopBack.Miss, CacheListPopBack.Error]
CacheListPopFrontResponse = Union[CacheListPopFront.Hit, CacheListPopFront.Miss, CacheListPopFront.Error]
CacheListRemoveValueResponse = Union[CacheListRemoveValue.Success, CacheListRemoveValue.Error]
CacheListRetainResponse = Union[CacheListRetain.Success, CacheListRetain.Error]
