from .credential_provider import CredentialProvider
from .local_provider import MomentoLocalProvider
from .token_codec import TokenKind, classify

__all__ = ["CredentialProvider", "MomentoLocalProvider", "TokenKind", "classify"]
