"""Tagged result type returned by ``RsvpTokenService.resolve``."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class TokenErrorKind(str, Enum):
    """Externally visible failure kinds."""

    CONFIGURATION = "configuration_error"
    INVALID_INPUT = "invalid_input"
    INVALID_FORMAT = "invalid_format"
    INVALID_TOKEN = "invalid_token"
    TOKEN_EXPIRED = "token_expired"


@dataclass(frozen=True)
class Ok:
    """Successful resolution carrying the normalized email."""

    email: str

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed resolution.

    Attributes
    ----------
    kind
        One of the closed set of failure kinds
    message
        Internal description, safe to log but not meant for end users
    """

    kind: TokenErrorKind
    message: str

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_expired(self) -> bool:
        return self.kind is TokenErrorKind.TOKEN_EXPIRED


TokenResolution = Union[Ok, Err]
