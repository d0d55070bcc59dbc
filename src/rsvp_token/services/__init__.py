"""RSVP token services.

Provides key derivation, payload serialization and token issuance/verification.
"""

from rsvp_token.services.key_derivation import derive_key
from rsvp_token.services.payload_codec import deserialize_payload, serialize_payload
from rsvp_token.services.token_service import RsvpTokenService

__all__ = [
    "RsvpTokenService",
    "derive_key",
    "deserialize_payload",
    "serialize_payload",
]
