"""
Credential resolution for the cache service.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from shared.errors import InvalidArgumentException
from shared.logging import get_logger
from . import token_codec

logger = get_logger("scs_client.auth.credential_provider")

DEFAULT_API_KEY_ENV_VAR = "MOMENTO_API_KEY"
DEFAULT_ENDPOINT_ENV_VAR = "MOMENTO_ENDPOINT"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


@dataclass(frozen=True)
class CredentialProvider:
    """Endpoints and key a client uses to reach and authenticate with the service.

    Build one with a class method rather than the constructor:

    - ``from_api_key_v2`` / ``from_env_var_v2`` for v2 (global) API keys;
    - ``from_string`` / ``from_env_var`` / ``from_disposable_token`` for legacy
      and v1 keys, which carry their own endpoints.
    """

    control_endpoint: str
    cache_endpoint: str
    api_key: str
    port: int = 443
    secure: bool = True

    def __repr__(self) -> str:
        return (
            f"CredentialProvider(control_endpoint={self.control_endpoint!r}, "
            f"cache_endpoint={self.cache_endpoint!r}, port={self.port}, secure={self.secure})"
        )

    @classmethod
    def from_api_key_v2(cls, api_key: str, endpoint: str) -> "CredentialProvider":
        """Create a credential from a v2 API key and the service's base endpoint.

        Args:
            api_key: The v2 API key.
            endpoint: The base domain, e.g. ``cell-1-us-east-1-1.prod.a.momentohq.com``.
        """
        if _is_blank(api_key):
            raise InvalidArgumentException("Auth token string cannot be empty")
        if _is_blank(endpoint):
            raise InvalidArgumentException("Endpoint string cannot be empty")
        if not token_codec.is_v2_token(api_key):
            raise InvalidArgumentException(
                "Received an invalid V2 API key. Are you using the correct key? "
                "Or did you mean to use `from_string()` or `from_env_var()` instead?"
            )

        return cls(
            control_endpoint=f"control.{endpoint}",
            cache_endpoint=f"cache.{endpoint}",
            api_key=api_key,
        )

    @classmethod
    def from_env_var_v2(
        cls,
        api_key_env_var: str = DEFAULT_API_KEY_ENV_VAR,
        endpoint_env_var: str = DEFAULT_ENDPOINT_ENV_VAR,
    ) -> "CredentialProvider":
        """Create a credential from a v2 API key and endpoint held in environment variables."""
        if _is_blank(api_key_env_var):
            raise InvalidArgumentException("ApiKey env var name cannot be empty")
        if _is_blank(endpoint_env_var):
            raise InvalidArgumentException("Endpoint env var name cannot be empty")

        api_key = os.environ.get(api_key_env_var)
        if _is_blank(api_key):
            raise InvalidArgumentException(f"Env var {api_key_env_var} must be set")
        endpoint = os.environ.get(endpoint_env_var)
        if _is_blank(endpoint):
            raise InvalidArgumentException(f"Env var {endpoint_env_var} must be set")

        return cls.from_api_key_v2(api_key, endpoint)

    @classmethod
    def from_string(
        cls,
        api_key: str,
        control_host: Optional[str] = None,
        cache_host: Optional[str] = None,
    ) -> "CredentialProvider":
        """Create a credential from a legacy or v1 API key.

        Args:
            api_key: The API key.
            control_host: Overrides the control endpoint found in the key.
            cache_host: Overrides the cache endpoint found in the key.
        """
        if token_codec.is_v2_token(api_key):
            raise InvalidArgumentException(
                "Received a V2 API key. Are you using the correct key? "
                "Or did you mean to use `from_api_key_v2()` or `from_env_var_v2()` instead?"
            )

        decoded = token_codec.decode(api_key)
        if decoded is None:
            logger.debug("API key is neither a legacy nor a v1 key", kind=token_codec.classify(api_key).value)
            raise InvalidArgumentException("Invalid API key")

        provider = cls(
            control_endpoint=decoded.control_endpoint,
            cache_endpoint=decoded.cache_endpoint,
            api_key=decoded.api_key,
        )
        return replace(
            provider,
            control_endpoint=control_host if control_host is not None else provider.control_endpoint,
            cache_endpoint=cache_host if cache_host is not None else provider.cache_endpoint,
        )

    @classmethod
    def from_env_var(
        cls,
        env_var: str,
        control_host: Optional[str] = None,
        cache_host: Optional[str] = None,
    ) -> "CredentialProvider":
        """Create a credential from a legacy or v1 API key held in an environment variable."""
        api_key = os.environ.get(env_var) if env_var else None
        if _is_blank(api_key):
            raise InvalidArgumentException(f"Environment variable {env_var} not set")
        return cls.from_string(api_key, control_host, cache_host)

    @classmethod
    def from_disposable_token(
        cls,
        disposable_token: str,
        control_host: Optional[str] = None,
        cache_host: Optional[str] = None,
    ) -> "CredentialProvider":
        """Create a credential from a disposable token; these share the v1/legacy encodings."""
        return cls.from_string(disposable_token, control_host, cache_host)
