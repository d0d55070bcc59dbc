"""RSVP token service.

Issues and verifies the opaque tokens carried by personal RSVP links.
A token is an AES-256-GCM encryption of the recipient's email and expiry,
so no server-side state is needed to resolve it.
"""

import base64
import binascii
import logging
import re
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from rsvp_token.exceptions import (
    InvalidFormatError,
    InvalidInputError,
    InvalidTokenError,
    MalformedPayloadError,
    RsvpTokenError,
    TokenExpiredError,
)
from rsvp_token.result import Err, Ok, TokenResolution
from rsvp_token.schemas import TokenPayload
from rsvp_token.services.key_derivation import derive_key
from rsvp_token.services.payload_codec import deserialize_payload, serialize_payload
from rsvp_token.time import now_ms, to_epoch_ms

logger = logging.getLogger(__name__)

TOKEN_DELIMITER = "."
NONCE_LENGTH = 12
TAG_LENGTH = 16

_SEGMENT_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


class RsvpTokenService:
    """Service for RSVP token creation and verification.

    The service is the key-derivation context: it derives the AES key once
    from the secret it is given, so several services with different secrets
    can live side by side in one process. Instances hold no mutable state
    and can be shared between threads.

    Examples
    --------
    >>> service = RsvpTokenService("your-secret", timedelta(days=120))
    >>> token = service.create_token("Alice@Example.com")
    >>> service.resolve_token(token)
    'alice@example.com'
    """

    def __init__(
        self,
        secret: str | None,
        default_lifetime: timedelta | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        """Initialize the token service.

        Parameters
        ----------
        secret
            Secret shared by issuer and verifier. Must be kept secure.
        default_lifetime
            Lifetime applied when create_token gets no expiry (optional)
        clock
            Returns the current time in epoch milliseconds

        Raises
        ------
        ConfigurationError
            If the secret is missing or empty
        """
        self._aead = AESGCM(derive_key(secret))
        self._default_lifetime = default_lifetime
        self._clock = clock

    def create_token(
        self,
        email: str,
        expires_at: int | datetime | None = None,
    ) -> str:
        """Create a token binding an email address to an expiry.

        Parameters
        ----------
        email
            Recipient email; trimmed and lower-cased before encoding
        expires_at
            Expiry as epoch milliseconds or a datetime (naive means UTC).
            Defaults to now plus the configured lifetime.

        Returns
        -------
        URL-safe token string ``nonce.ciphertext.tag``

        Raises
        ------
        InvalidInputError
            If the email is empty or the expiry cannot be determined
        """
        issued_at = self._clock()
        payload = TokenPayload(
            email=self._normalize_email(email),
            issued_at=issued_at,
            expires_at=self._resolve_expiry(expires_at, issued_at),
        )

        nonce = secrets.token_bytes(NONCE_LENGTH)
        sealed = self._aead.encrypt(nonce, serialize_payload(payload), None)
        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]

        logger.debug("Issued RSVP token for %s", payload.email)
        return TOKEN_DELIMITER.join(
            _b64url_encode(part) for part in (nonce, ciphertext, tag)
        )

    def resolve_token(self, token: str) -> str:
        """Verify a token and return the email it carries.

        Parameters
        ----------
        token
            Token string taken from an RSVP link

        Returns
        -------
        The normalized email address

        Raises
        ------
        InvalidFormatError
            If the token is not three base64url segments
        InvalidTokenError
            If authentication fails or the payload is malformed
        TokenExpiredError
            If the token is authentic but past its expiry
        """
        nonce, ciphertext, tag = self._split(token)

        if len(nonce) != NONCE_LENGTH or len(tag) != TAG_LENGTH:
            logger.info("Rejected RSVP token: unexpected nonce or tag length")
            raise InvalidTokenError

        try:
            plaintext = self._aead.decrypt(nonce, ciphertext + tag, None)
        except InvalidTag as e:
            logger.info("Rejected RSVP token: authentication failed")
            raise InvalidTokenError from e

        try:
            payload = deserialize_payload(plaintext)
        except MalformedPayloadError as e:
            # Authentic but unreadable: a leaked key or an encoder bug
            logger.warning("Rejected RSVP token: authenticated payload is malformed")
            raise InvalidTokenError from e

        if payload.is_expired(self._clock()):
            logger.info("Rejected RSVP token for %s: expired", payload.email)
            raise TokenExpiredError

        return payload.email

    def resolve(self, token: str) -> TokenResolution:
        """Resolve a token into ``Ok(email)`` or ``Err(kind, message)``."""
        try:
            return Ok(self.resolve_token(token))
        except RsvpTokenError as e:
            return Err(kind=e.kind, message=e.message)

    @staticmethod
    def _normalize_email(email: str) -> str:
        if not isinstance(email, str):
            msg = "Email must be a string"
            raise InvalidInputError(msg)
        normalized = email.strip().lower()
        if not normalized:
            msg = "Email cannot be empty"
            raise InvalidInputError(msg)
        return normalized

    def _resolve_expiry(self, expires_at: int | datetime | None, issued_at: int) -> int:
        if expires_at is None:
            if self._default_lifetime is None:
                msg = "expires_at is required when no default lifetime is configured"
                raise InvalidInputError(msg)
            return issued_at + self._default_lifetime // timedelta(milliseconds=1)
        if isinstance(expires_at, datetime):
            return to_epoch_ms(expires_at)
        if isinstance(expires_at, int) and not isinstance(expires_at, bool):
            return expires_at
        msg = "expires_at must be epoch milliseconds or a datetime"
        raise InvalidInputError(msg)

    @staticmethod
    def _split(token: str) -> tuple[bytes, bytes, bytes]:
        if not isinstance(token, str):
            raise InvalidFormatError

        segments = token.split(TOKEN_DELIMITER)
        if len(segments) != 3 or not all(segments):
            raise InvalidFormatError

        nonce, ciphertext, tag = (_b64url_decode(segment) for segment in segments)
        return nonce, ciphertext, tag


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(segment: str) -> bytes:
    if not _SEGMENT_PATTERN.fullmatch(segment):
        raise InvalidFormatError
    padded = segment + "=" * (-len(segment) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as e:
        raise InvalidFormatError from e
