"""
Classification and decoding of API key encodings.

Three encodings are recognized:

- legacy: ``header.payload.signature`` where the payload carries the control
  (``cp``) and cache (``c``) endpoints.
- v1: one base64 blob of ``{"endpoint": ..., "api_key": ...}``.
- v2: ``header.payload.signature`` where the payload carries ``"t": "g"``;
  endpoints are supplied by the caller.

Each encoding has its own validity predicate so a token is classified by
what it contains, never by which decoder happened to fail.
"""

import base64
import binascii
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shared.logging import get_logger

logger = get_logger("scs_client.auth.token_codec")

V2_DISCRIMINATOR_FIELD = "t"
V2_DISCRIMINATOR_VALUE = "g"


class TokenKind(str, Enum):
    """Encodings an API key can have."""

    LEGACY = "legacy"
    V1 = "v1"
    V2 = "v2"
    INVALID = "invalid"


@dataclass(frozen=True)
class DecodedToken:
    """Endpoints and key extracted from a token."""

    kind: TokenKind
    control_endpoint: str
    cache_endpoint: str
    api_key: str


class LegacyKeyPayload(BaseModel):
    """Claims of a legacy key that name its endpoints."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    control_endpoint: str = Field(alias="cp", min_length=1)
    cache_endpoint: str = Field(alias="c", min_length=1)


class V1KeyPayload(BaseModel):
    """Decoded body of a v1 key."""

    model_config = ConfigDict(extra="ignore")

    endpoint: str = Field(min_length=1)
    api_key: str = Field(min_length=1)


def decode_base64(value: str) -> Optional[bytes]:
    """Decode standard or URL-safe base64, padded or not. None if invalid."""
    normalized = value.strip().replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    try:
        return base64.b64decode(normalized, validate=True)
    except binascii.Error:
        return None


def _decode_json_object(value: str) -> Optional[Dict[str, Any]]:
    raw = decode_base64(value)
    if raw is None:
        return None
    try:
        decoded = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None
    return decoded if isinstance(decoded, dict) else None


def _jwt_payload(token: str) -> Optional[Dict[str, Any]]:
    """Payload of a three-part dotted token, or None if it has another shape."""
    parts = token.split(".")
    if len(parts) != 3:
        return None
    return _decode_json_object(parts[1])


def _parse_legacy(token: str) -> Optional[LegacyKeyPayload]:
    payload = _jwt_payload(token)
    if payload is None:
        return None
    try:
        return LegacyKeyPayload.model_validate(payload)
    except ValidationError as exc:
        logger.debug("Token payload is not a legacy key", errors=exc.error_count())
        return None


def _parse_v1(token: str) -> Optional[V1KeyPayload]:
    payload = _decode_json_object(token)
    if payload is None:
        return None
    try:
        return V1KeyPayload.model_validate(payload)
    except ValidationError as exc:
        logger.debug("Token body is not a v1 key", errors=exc.error_count())
        return None


def is_v2_token(token: str) -> bool:
    """True when the token's payload carries the global-key discriminator."""
    payload = _jwt_payload(token)
    return payload is not None and payload.get(V2_DISCRIMINATOR_FIELD) == V2_DISCRIMINATOR_VALUE


def is_legacy_token(token: str) -> bool:
    return not is_v2_token(token) and _parse_legacy(token) is not None


def is_v1_token(token: str) -> bool:
    return _parse_v1(token) is not None


def decode_legacy(token: str) -> DecodedToken:
    payload = _parse_legacy(token)
    if payload is None:
        raise ValueError("Malformed legacy API key")
    return DecodedToken(TokenKind.LEGACY, payload.control_endpoint, payload.cache_endpoint, token)


def decode_v1(token: str) -> DecodedToken:
    payload = _parse_v1(token)
    if payload is None:
        raise ValueError("Malformed v1 API key")
    return DecodedToken(
        TokenKind.V1,
        f"control.{payload.endpoint}",
        f"cache.{payload.endpoint}",
        payload.api_key,
    )


# Tried in order by decode(); v2 keys are never decoded here since their
# endpoints do not live in the token.
SELF_DESCRIBING_DECODERS: Tuple[Tuple[TokenKind, Callable[[str], bool], Callable[[str], DecodedToken]], ...] = (
    (TokenKind.LEGACY, is_legacy_token, decode_legacy),
    (TokenKind.V1, is_v1_token, decode_v1),
)


def classify(token: str) -> TokenKind:
    """Return the single encoding the token belongs to."""
    if is_v2_token(token):
        return TokenKind.V2
    for kind, predicate, _ in SELF_DESCRIBING_DECODERS:
        if predicate(token):
            return kind
    return TokenKind.INVALID


def decode(token: str) -> Optional[DecodedToken]:
    """Decode a legacy or v1 token. None if it is neither."""
    for kind, predicate, decoder in SELF_DESCRIBING_DECODERS:
        if predicate(token):
            logger.debug("Decoded API key", kind=kind.value)
            return decoder(token)
    return None
