"""Credentials for a cache server running locally."""

from .credential_provider import CredentialProvider

DEFAULT_HOSTNAME = "127.0.0.1"
DEFAULT_PORT = 8080


class MomentoLocalProvider:
    """Builds plaintext, keyless credentials for local development servers."""

    @staticmethod
    def create(hostname: str = DEFAULT_HOSTNAME, port: int = DEFAULT_PORT) -> CredentialProvider:
        return CredentialProvider(
            control_endpoint=hostname,
            cache_endpoint=hostname,
            api_key="",
            port=port,
            secure=False,
        )
