"""
Building blocks for operation results.

Each operation returns one variant of a closed family, e.g. ``CacheGet.Hit``,
``CacheGet.Miss`` or ``CacheGet.Error``. Families are published as ``Union``
aliases (``CacheGetResponse``) so callers can ``match`` on them exhaustively.
The ``Error`` variant of every family is an ``SdkException`` and may be raised.
"""

from typing import Optional

from shared.errors import SdkException


class CacheResponse:
    """Marker base for every result variant."""


class ErrorResponseBase(CacheResponse, SdkException):
    """Error variant wrapping the ``SdkException`` that caused it."""

    def __init__(self, error: SdkException):
        super().__init__(
            error.message,
            error.error_code,
            error.transport_details,
            error.details,
        )
        self.inner_exception = error

    def __str__(self) -> str:
        return f"{type(self).__qualname__}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__qualname__}(error_code={self.error_code.value}, "
            f"message={self.message!r}, inner_exception={self.inner_exception!r})"
        )

    @property
    def transport_code(self) -> Optional[str]:
        """Transport status name, when the failure came from the service."""
        return self.transport_details.code if self.transport_details else None
