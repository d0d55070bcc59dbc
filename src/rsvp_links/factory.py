"""Wiring of the token service from application settings."""

from __future__ import annotations

from datetime import datetime

from rsvp_config import Settings, get_settings
from rsvp_token import RsvpTokenService


def build_token_service(settings: Settings | None = None) -> RsvpTokenService:
    """Create a token service from settings.

    Raises
    ------
    ConfigurationError
        If RSVP_TOKEN_SECRET is not configured
    """
    settings = settings or get_settings()
    return RsvpTokenService(
        secret=settings.token_secret,
        default_lifetime=settings.default_token_lifetime,
    )


def create_rsvp_token(email: str, expires_at: int | datetime | None = None) -> str:
    """Create a token using the process-wide configured secret."""
    return build_token_service().create_token(email, expires_at)


def resolve_rsvp_token(token: str) -> str:
    """Resolve a token using the process-wide configured secret."""
    return build_token_service().resolve_token(token)
