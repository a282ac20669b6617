"""
Client configuration for the scs-client SDK.

Values come from keyword arguments, then ``SCS_CLIENT_*`` environment
variables, then an optional ``.env`` file.
"""

from datetime import timedelta
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Configuration(BaseSettings):
    """Tunable client settings."""

    model_config = SettingsConfigDict(
        env_prefix="SCS_CLIENT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    log_level: str = Field(default="info")

    # Per-call deadline; the only value the request pipeline reads.
    request_timeout_seconds: float = Field(default=15.0, gt=0)

    # Channel tunables, handed to the transport as-is
    connect_timeout_seconds: float = Field(default=5.0, gt=0)
    max_connections: int = Field(default=100, gt=0)
    max_keepalive_connections: int = Field(default=20, ge=0)
    keepalive_expiry_seconds: float = Field(default=30.0, ge=0)

    # Observability
    enable_tracing: bool = Field(default=False)
    otlp_endpoint: Optional[str] = Field(default=None)
    enable_metrics: bool = Field(default=True)

    def with_request_timeout(self, timeout: timedelta) -> "Configuration":
        """Copy of this configuration with a different per-call deadline.

        The copy is validated, so a non-positive deadline raises ``ValidationError``.
        """
        return type(self)(**{**self.model_dump(), "request_timeout_seconds": timeout.total_seconds()})


class Configurations:
    """Prebuilt configurations for common environments."""

    class Laptop:
        """Development from a laptop; tolerates high latency."""

        @staticmethod
        def latest() -> Configuration:
            return Configuration(
                request_timeout_seconds=15.0,
                max_keepalive_connections=10,
            )

    class InRegion:
        """Clients running in the same region as the service."""

        @staticmethod
        def latest() -> Configuration:
            return Configuration(
                request_timeout_seconds=1.1,
                max_keepalive_connections=50,
            )
