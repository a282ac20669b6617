"""Request-side option types."""

from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Optional


@dataclass(frozen=True)
class CollectionTtl:
    """How a collection write treats the collection's time-to-live.

    ``ttl`` of None means "use the client's default TTL". ``refresh_ttl``
    controls whether an existing collection's TTL is reset by the write.
    """

    ttl: Optional[timedelta] = None
    refresh_ttl: bool = True

    @staticmethod
    def from_cache_ttl() -> "CollectionTtl":
        return CollectionTtl(None, True)

    @staticmethod
    def of(ttl: timedelta) -> "CollectionTtl":
        return CollectionTtl(ttl, True)

    @staticmethod
    def refresh_ttl_if_provided(ttl: Optional[timedelta] = None) -> "CollectionTtl":
        """Refresh only when a duration is given."""
        return CollectionTtl(ttl, ttl is not None)

    def with_refresh_ttl_on_updates(self) -> "CollectionTtl":
        return replace(self, refresh_ttl=True)

    def with_no_refresh_ttl_on_updates(self) -> "CollectionTtl":
        return replace(self, refresh_ttl=False)

    def to_seconds(self) -> Optional[int]:
        """Whole seconds, truncated."""
        if self.ttl is None:
            return None
        return self.ttl // timedelta(seconds=1)

    def to_milliseconds(self) -> Optional[int]:
        if self.ttl is None:
            return None
        return self.ttl // timedelta(milliseconds=1)
