"""RSVP token exceptions.

These exceptions are raised by the rsvp_token package and should be
caught and handled by the caller (a request handler or the CLI).
Only ``TokenExpiredError`` is meant to be shown to an end user as-is;
every other failure shares one generic user-facing message.
"""

from rsvp_token.result import TokenErrorKind

GENERIC_USER_MESSAGE = "This RSVP link is not valid. Please request a new one."


class RsvpTokenError(Exception):
    """Base exception for all RSVP token errors."""

    kind: TokenErrorKind = TokenErrorKind.INVALID_TOKEN
    user_message: str = GENERIC_USER_MESSAGE

    def __init__(self, message: str = "RSVP token error"):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(RsvpTokenError):
    """Raised when the token secret is missing or empty."""

    kind = TokenErrorKind.CONFIGURATION

    def __init__(self, message: str = "Missing RSVP_TOKEN_SECRET configuration"):
        super().__init__(message)


class InvalidInputError(RsvpTokenError):
    """Raised when create_token receives an unusable value."""

    kind = TokenErrorKind.INVALID_INPUT

    def __init__(self, message: str = "Invalid token input"):
        super().__init__(message)


class InvalidFormatError(RsvpTokenError):
    """Raised when a token is not three base64url segments."""

    kind = TokenErrorKind.INVALID_FORMAT

    def __init__(self, message: str = "Invalid RSVP token format"):
        super().__init__(message)


class InvalidTokenError(RsvpTokenError):
    """Raised when a token fails authentication or carries a bad payload.

    Wrong key, tampered bytes and a malformed payload all surface as this
    one error so a caller cannot tell them apart.
    """

    kind = TokenErrorKind.INVALID_TOKEN

    def __init__(self, message: str = "Invalid RSVP token"):
        super().__init__(message)


class TokenExpiredError(RsvpTokenError):
    """Raised when an authentic token is past its expiry."""

    kind = TokenErrorKind.TOKEN_EXPIRED
    user_message = "This RSVP link has expired. Please request a new one."

    def __init__(self, message: str = "RSVP token expired"):
        super().__init__(message)


class MalformedPayloadError(RsvpTokenError):
    """Raised by the payload codec when decrypted bytes have the wrong shape.

    Never escapes the decoder; it is folded into ``InvalidTokenError``.
    """

    def __init__(self, message: str = "Malformed RSVP token payload"):
        super().__init__(message)
