"""
Local argument checks run before any request leaves the client.

Each check raises ``InvalidArgumentException`` with a fixed message and has
no other effect.
"""

from datetime import timedelta
from typing import Any, Optional

from shared.errors import InvalidArgumentException
from .requests import CollectionTtl


def _require_name(name: Any, message: str) -> None:
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgumentException(message)


def validate_cache_name(cache_name: Any) -> None:
    _require_name(cache_name, "Non-empty cache name is required")


def validate_list_name(list_name: Any) -> None:
    _require_name(list_name, "Non-empty list name is required")


def validate_set_name(set_name: Any) -> None:
    _require_name(set_name, "Non-empty set name is required")


def validate_dictionary_name(dictionary_name: Any) -> None:
    _require_name(dictionary_name, "Non-empty dictionary name is required")


def validate_ttl(ttl: Any) -> None:
    if not isinstance(ttl, timedelta) or ttl <= timedelta(0):
        raise InvalidArgumentException("Cache item TTL must be positive")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_collection_ttl(ttl: Any) -> None:
    if ttl is not None and not isinstance(ttl, CollectionTtl):
        raise InvalidArgumentException("Collection TTL must be a CollectionTtl")


def validate_truncate_to_size(truncate_to_size: Optional[int]) -> None:
    if truncate_to_size is not None and (not _is_int(truncate_to_size) or truncate_to_size <= 0):
        raise InvalidArgumentException("Truncate to size must be positive")


def validate_index_range(start_index: Optional[int], end_index: Optional[int]) -> None:
    """Only checked when both ends are given; either end may be negative."""
    for index in (start_index, end_index):
        if index is not None and not _is_int(index):
            raise InvalidArgumentException("List index must be an integer")
    if start_index is None or end_index is None:
        return
    if end_index <= start_index:
        raise InvalidArgumentException("End index must be greater than start index")


def validate_offset(offset: Optional[int]) -> None:
    if offset is not None and (not _is_int(offset) or offset < 0):
        raise InvalidArgumentException("Offset must be greater than or equal to 0")


def validate_count(count: Optional[int]) -> None:
    if count is not None and (not _is_int(count) or count <= 0):
        raise InvalidArgumentException("Count must be greater than 0")


def validate_value(value: Any) -> None:
    if value is None:
        raise InvalidArgumentException("A non-null value is required")
    if not isinstance(value, (str, bytes)):
        raise InvalidArgumentException("Value must be str or bytes")


def validate_signing_key_ttl(ttl: Any) -> None:
    if not isinstance(ttl, timedelta) or ttl < timedelta(0):
        raise InvalidArgumentException("Signing key TTL cannot be negative")
