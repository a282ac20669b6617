"""
Wire messages exchanged with the cache service.

Bytes fields travel as base64 strings in JSON.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WireMessage(BaseModel):
    """Base for every request and response body."""

    model_config = ConfigDict(
        extra="ignore",
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )


class ECacheResult(str, Enum):
    """Result codes the data plane reports for keyed lookups."""

    INVALID = "Invalid"
    OK = "Ok"
    HIT = "Hit"
    MISS = "Miss"


class Empty(WireMessage):
    pass


# Scalar

class GetRequest(WireMessage):
    cache_key: bytes


class GetResponse(WireMessage):
    # Kept as a plain string so unknown codes reach the result mapping.
    result: str = ECacheResult.INVALID.value
    cache_body: bytes = b""
    message: str = ""


class SetRequest(WireMessage):
    cache_key: bytes
    cache_body: bytes
    ttl_milliseconds: int = Field(ge=0)


class SetResponse(WireMessage):
    pass


class DeleteRequest(WireMessage):
    cache_key: bytes


class DeleteResponse(WireMessage):
    pass


# Lists

class ListConcatenateBackRequest(WireMessage):
    list_name: bytes
    values: List[bytes]
    ttl_milliseconds: int = Field(ge=0)
    refresh_ttl: bool
    truncate_front_to_size: int = 0


class ListConcatenateFrontRequest(WireMessage):
    list_name: bytes
    values: List[bytes]
    ttl_milliseconds: int = Field(ge=0)
    refresh_ttl: bool
    truncate_back_to_size: int = 0


class ListPushBackRequest(WireMessage):
    list_name: bytes
    value: bytes
    ttl_milliseconds: int = Field(ge=0)
    refresh_ttl: bool
    truncate_front_to_size: int = 0


class ListPushFrontRequest(WireMessage):
    list_name: bytes
    value: bytes
    ttl_milliseconds: int = Field(ge=0)
    refresh_ttl: bool
    truncate_back_to_size: int = 0


class ListLengthWriteResponse(WireMessage):
    """Response of every list write that reports the resulting length."""

    list_length: int


class ListFetchRequest(WireMessage):
    list_name: bytes
    inclusive_start: Optional[int] = None
    exclusive_end: Optional[int] = None


class ListFetchFound(WireMessage):
    values: List[bytes] = []


class ListFetchResponse(WireMessage):
    found: Optional[ListFetchFound] = None
    missing: Optional[Empty] = None


class ListLengthRequest(WireMessage):
    list_name: bytes


class ListLengthFound(WireMessage):
    length: int


class ListLengthResponse(WireMessage):
    found: Optional[ListLengthFound] = None
    missing: Optional[Empty] = None


class ListPopBackRequest(WireMessage):
    list_name: bytes


class ListPopFrontRequest(WireMessage):
    list_name: bytes


class ListPopFound(WireMessage):
    value: bytes


class ListPopResponse(WireMessage):
    found: Optional[ListPopFound] = None
    missing: Optional[Empty] = None


class ListRemoveRequest(WireMessage):
    list_name: bytes
    all_elements_with_value: bytes


class ListRemoveResponse(WireMessage):
    pass


class ListRetainRequest(WireMessage):
    list_name: bytes
    inclusive_start: Optional[int] = None
    exclusive_end: Optional[int] = None
    ttl_milliseconds: int = Field(ge=0)
    refresh_ttl: bool


class ListRetainResponse(WireMessage):
    pass


# Control plane

class CreateCacheRequest(WireMessage):
    cache_name: str


class DeleteCacheRequest(WireMessage):
    cache_name: str


class FlushCacheRequest(WireMessage):
    cache_name: str


class ListCachesRequest(WireMessage):
    next_token: str = ""


class WireCache(WireMessage):
    cache_name: str


class ListCachesResponse(WireMessage):
    cache: List[WireCache] = []
    next_token: str = ""


class CreateSigningKeyRequest(WireMessage):
    ttl_minutes: int = Field(ge=0)


class CreateSigningKeyResponse(WireMessage):
    # JSON web key; its "kid" member is the key id.
    key: str
    expires_at: int


class RevokeSigningKeyRequest(WireMessage):
    key_id: str


class ListSigningKeysRequest(WireMessage):
    next_token: str = ""


class WireSigningKey(WireMessage):
    key_id: str
    expires_at: int


class ListSigningKeysResponse(WireMessage):
    signing_key: List[WireSigningKey] = []
    next_token: str = ""
