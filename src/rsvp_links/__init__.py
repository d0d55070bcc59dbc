"""RSVP link issuing: settings-backed token helpers and bulk link generation."""

from rsvp_links.factory import (
    build_token_service,
    create_rsvp_token,
    resolve_rsvp_token,
)
from rsvp_links.links import (
    RsvpLink,
    RsvpLinkGenerator,
    build_rsvp_link,
    collect_emails,
    write_csv,
)

__all__ = [
    "build_token_service",
    "create_rsvp_token",
    "resolve_rsvp_token",
    "RsvpLink",
    "RsvpLinkGenerator",
    "build_rsvp_link",
    "collect_emails",
    "write_csv",
]
