"""Results of signing key operations."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Union

from .base import CacheResponse, ErrorResponseBase


@dataclass(frozen=True)
class SigningKey:
    key_id: str
    expires_at: datetime
    endpoint: str


class CreateSigningKey:
    """Results of ``create_signing_key``."""

    @dataclass(frozen=True)
    class Success(CacheResponse):
        key_id: str
        endpoint: str
        key: str
        expires_at: datetime

        def __str__(self) -> str:
            # The key itself is a secret.
            return (
                f"CreateSigningKey.Success(key_id={self.key_id!r}, "
                f"endpoint={self.endpoint!r}, expires_at={self.expires_at.isoformat()})"
            )

        __repr__ = __str__

    class Error(ErrorResponseBase):
        pass


class ListSigningKeys:
    @dataclass(frozen=True)
    class Success(CacheResponse):
        signing_keys: List[SigningKey] = field(default_factory=list)

    class Error(ErrorResponseBase):
        pass


class RevokeSigningKey:
    @dataclass(frozen=True)
    class Success(CacheResponse):
        pass

    class Error(ErrorResponseBase):
        pass


CreateSigningKeyResponse = Union[CreateSigningKey.Success, CreateSigningKey.Error]
ListSigningKeysResponse = Union[ListSigningKeys.Success, ListSigningKeys.Error]
RevokeSigningKeyResponse = Union[RevokeSigningKey.Success, RevokeSigningKey.Error]
