"""
scs-client: asyncio SDK for the cache service.
"""

from shared.config import Configuration, Configurations
from shared.errors import MomentoErrorCode, SdkException
from shared.logging import configure_logging
from .auth import CredentialProvider, MomentoLocalProvider
from .cache_client import CacheClient
from .requests import CollectionTtl
from .responses import (
    CacheDelete,
    CacheGet,
    CacheInfo,
    CacheListConcatenateBack,
    CacheListConcatenateFront,
    CacheListFetch,
    CacheListLength,
    CacheListPopBack,
    CacheListPopFront,
    CacheListPushBack,
    CacheListPushFront,
    CacheListRemoveValue,
    CacheListRetain,
    CacheSet,
    CreateCache,
    CreateSigningKey,
    DeleteCache,
    FlushCache,
    ListCaches,
    ListSigningKeys,
    RevokeSigningKey,
    SigningKey,
)

__all__ = [
    "CacheClient",
    "CredentialProvider",
    "MomentoLocalProvider",
    "Configuration",
    "Configurations",
    "configure_logging",
    "CollectionTtl",
    "MomentoErrorCode",
    "SdkException",
    "CacheDelete",
    "CacheGet",
    "CacheInfo",
    "CacheListConcatenateBack",
    "CacheListConcatenateFront",
    "CacheListFetch",
    "CacheListLength",
    "CacheListPopBack",
    "CacheListPopFront",
    "CacheListPushBack",
    "CacheListPushFront",
    "CacheListRemoveValue",
    "CacheListRetain",
    "CacheSet",
    "CreateCache",
    "CreateSigningKey",
    "DeleteCache",
    "FlushCache",
    "ListCaches",
    "ListSigningKeys",
    "RevokeSigningKey",
    "SigningKey",
]
