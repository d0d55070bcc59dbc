"""RSVP Token - Stateless identity tokens for personal RSVP links.

This package lets an RSVP link carry a recipient's email address without
any server-side session store. It handles:
- Key derivation from the operator-supplied secret (SHA-256)
- Payload serialization (compact JSON)
- Token creation and verification (AES-256-GCM)

Architecture:
    rsvp_token/
    ├── services/           # Pure logic (key derivation, codec, token service)
    ├── schemas.py          # Data classes
    ├── result.py           # Ok / Err resolution result
    ├── time.py             # Epoch millisecond helpers
    └── exceptions.py       # Token exceptions

Usage:
    from rsvp_token import RsvpTokenService, TokenExpiredError

    service = RsvpTokenService(secret)
    token = service.create_token("guest@example.com", expires_at)
    email = service.resolve_token(token)
"""

from rsvp_token.exceptions import (
    ConfigurationError,
    InvalidFormatError,
    InvalidInputError,
    InvalidTokenError,
    MalformedPayloadError,
    RsvpTokenError,
    TokenExpiredError,
)
from rsvp_token.result import Err, Ok, TokenErrorKind, TokenResolution
from rsvp_token.schemas import PAYLOAD_VERSION, TokenPayload
from rsvp_token.services import RsvpTokenService

__all__ = [
    # Services
    "RsvpTokenService",
    # Schemas
    "TokenPayload",
    "PAYLOAD_VERSION",
    # Results
    "Ok",
    "Err",
    "TokenErrorKind",
    "TokenResolution",
    # Exceptions
    "RsvpTokenError",
    "ConfigurationError",
    "InvalidInputError",
    "InvalidFormatError",
    "InvalidTokenError",
    "TokenExpiredError",
    "MalformedPayloadError",
]
