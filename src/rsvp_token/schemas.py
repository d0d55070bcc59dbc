"""Data classes for the RSVP token package."""

from dataclasses import dataclass

PAYLOAD_VERSION = 1


@dataclass(frozen=True)
class TokenPayload:
    """Plaintext record protected by an RSVP token.

    This is an in-flight value only: built for one encode call or
    recovered by one decode call, never stored.

    Attributes
    ----------
    email
        Recipient email address, already trimmed and lower-cased
    issued_at
        Issue time in milliseconds since the Unix epoch
    expires_at
        Expiry time in milliseconds since the Unix epoch
    version
        Payload shape version, always ``PAYLOAD_VERSION``
    """

    email: str
    issued_at: int
    expires_at: int
    version: int = PAYLOAD_VERSION

    def is_expired(self, now_ms: int) -> bool:
        """Check if the token has expired at ``now_ms``.

        A token is still valid at the exact millisecond of its expiry.
        """
        return now_ms > self.expires_at
