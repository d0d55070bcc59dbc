"""Serialization of TokenPayload to and from the encrypted plaintext."""

import json
import math
from typing import Any

from rsvp_token.exceptions import MalformedPayloadError
from rsvp_token.schemas import PAYLOAD_VERSION, TokenPayload

_REQUIRED_KEYS = ("email", "exp", "iat", "v")


def serialize_payload(payload: TokenPayload) -> bytes:
    """Encode a payload as compact, key-sorted JSON."""
    document = {
        "email": payload.email,
        "exp": payload.expires_at,
        "iat": payload.issued_at,
        "v": payload.version,
    }
    return json.dumps(document, separators=(",", ":"), sort_keys=True).encode(
        "utf-8"
    )


def deserialize_payload(data: bytes) -> TokenPayload:
    """Parse decrypted bytes back into a TokenPayload.

    Parameters
    ----------
    data
        UTF-8 JSON produced by ``serialize_payload``

    Returns
    -------
    The decoded TokenPayload

    Raises
    ------
    MalformedPayloadError
        For any decode or shape problem. No other exception type escapes.
    """
    try:
        document = json.loads(data.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError, AttributeError) as e:
        raise MalformedPayloadError from e

    if not isinstance(document, dict):
        raise MalformedPayloadError
    if any(key not in document for key in _REQUIRED_KEYS):
        raise MalformedPayloadError

    email = document["email"]
    version = document["v"]
    if not isinstance(email, str):
        raise MalformedPayloadError
    if not _is_int(version) or version != PAYLOAD_VERSION:
        raise MalformedPayloadError

    return TokenPayload(
        email=email,
        issued_at=_timestamp(document["iat"]),
        expires_at=_timestamp(document["exp"]),
        version=PAYLOAD_VERSION,
    )


def _reject_constant(name: str) -> Any:
    # json.loads would otherwise accept NaN and Infinity
    raise ValueError(f"Unsupported JSON constant: {name}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _timestamp(value: Any) -> int:
    if _is_int(value):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    raise MalformedPayloadError
