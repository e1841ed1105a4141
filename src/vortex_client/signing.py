"""
Token signing for the Vortex widget.

Tokens are JWT-shaped (header.payload.signature) and must match the Node.js,
PHP and other Vortex SDKs byte for byte, so header/payload key order and JSON
escaping are fixed here and nowhere else.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
import uuid
from typing import Any, Dict, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from .types import GroupInput, IdentifierInput, InvalidApiKeyError

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "VRTX"
TOKEN_TTL_SECONDS = 3600


class ApiKey(BaseModel):
    """A parsed API key (format: VRTX.base64url(uuid).key)"""

    model_config = ConfigDict(frozen=True)

    prefix: str
    key_id: str  # Canonical UUID string, also used as the token's "kid"
    secret: str = Field(repr=False)

    @property
    def signing_key(self) -> bytes:
        """Per-key signing secret: HMAC-SHA256(secret, key_id)"""
        return hmac.new(
            self.secret.encode(), self.key_id.encode(), hashlib.sha256
        ).digest()


def base64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode().rstrip("=")


def base64url_decode(data: str) -> bytes:
    """Decode URL-safe base64, with or without padding"""
    padding = 4 - len(data) % 4
    if padding != 4:
        data = data + ("=" * padding)
    data = data.replace("-", "+").replace("_", "/")
    return base64.b64decode(data, validate=True)


def parse_api_key(api_key: str) -> ApiKey:
    """
    Parse and validate an API key

    Args:
        api_key: Raw API key string

    Returns:
        The parsed key with its UUID rendered as a string

    Raises:
        InvalidApiKeyError: If the key is malformed, mis-prefixed, or its
            encoded id does not decode to exactly 16 bytes
    """
    parts = api_key.split(".")
    if len(parts) != 3:
        raise InvalidApiKeyError(
            "Invalid API key format. Expected: VRTX.{encodedId}.{key}"
        )

    prefix, encoded_id, secret = parts

    if prefix != API_KEY_PREFIX:
        raise InvalidApiKeyError("Invalid API key prefix. Expected: VRTX")

    try:
        id_bytes = base64url_decode(encoded_id)
    except ValueError as e:
        raise InvalidApiKeyError(f"Invalid UUID in API key: {e}") from e

    if len(id_bytes) != 16:
        raise InvalidApiKeyError(
            f"Invalid UUID byte length in API key: expected 16, got {len(id_bytes)}"
        )

    return ApiKey(prefix=prefix, key_id=str(uuid.UUID(bytes=id_bytes)), secret=secret)


def _to_json(data: Dict[str, Any]) -> str:
    # Same output as JSON.stringify: no spaces, "/" and non-ASCII left as-is
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def _identifier_claim(identifier: Union[IdentifierInput, Dict[str, Any]]) -> Any:
    if isinstance(identifier, IdentifierInput):
        return identifier.model_dump()
    return identifier


def _group_claim(group: Union[GroupInput, Dict[str, Any]]) -> Any:
    if isinstance(group, GroupInput):
        legacy = group.uses_legacy_id
        claim: Any = group.model_dump(by_alias=True, exclude_none=True)
    else:
        # Caller dicts are embedded exactly as given
        legacy = (
            isinstance(group, dict)
            and "id" in group
            and "groupId" not in group
            and "group_id" not in group
        )
        claim = group

    if legacy:
        logger.warning(
            "[Vortex SDK] DEPRECATED: Group field 'id' is deprecated. "
            "Use 'groupId' instead."
        )
    return claim


def sign_token(
    api_key: Union[str, ApiKey],
    user_id: str,
    identifiers: Sequence[Union[IdentifierInput, Dict[str, Any]]],
    groups: Sequence[Union[GroupInput, Dict[str, Any]]],
    role: Optional[str] = None,
    *,
    issued_at: Optional[int] = None,
) -> str:
    """
    Build and sign a widget token

    Args:
        api_key: Raw API key or an already parsed ApiKey
        user_id: Your internal user ID
        identifiers: Identifiers of the user (type/value pairs)
        groups: Groups the user belongs to
        role: Optional user role
        issued_at: Signing time in Unix seconds (defaults to now)

    Returns:
        Token string: header.payload.signature
    """
    key = parse_api_key(api_key) if isinstance(api_key, str) else api_key

    iat = int(time.time()) if issued_at is None else issued_at

    header = {
        "iat": iat,
        "alg": "HS256",
        "typ": "JWT",
        "kid": key.key_id,
    }

    payload: Dict[str, Any] = {
        "userId": user_id,
        "groups": [_group_claim(g) for g in groups],
        "role": role,
        "expires": iat + TOKEN_TTL_SECONDS,
        "identifiers": [_identifier_claim(i) for i in identifiers],
    }

    header_b64 = base64url_encode(_to_json(header).encode("utf-8"))
    payload_b64 = base64url_encode(_to_json(payload).encode("utf-8"))

    to_sign = f"{header_b64}.{payload_b64}"
    signature = hmac.new(key.signing_key, to_sign.encode(), hashlib.sha256).digest()

    return f"{to_sign}.{base64url_encode(signature)}"

