"""Personal RSVP link generation.

Turns a list of recipient emails into links of the form
``<base_url>?t=<token>``, one fresh token per recipient.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import TextIO
from urllib.parse import quote

from rsvp_token import RsvpTokenService

logger = logging.getLogger(__name__)

TOKEN_QUERY_PARAM = "t"


@dataclass(frozen=True)
class RsvpLink:
    """A recipient email and the personal link issued for it."""

    email: str
    link: str


def collect_emails(lines: Iterable[str] = (), csv_list: str = "") -> list[str]:
    """Collect normalized, de-duplicated emails.

    Parameters
    ----------
    lines
        One email per item, e.g. the lines of an attendee file
    csv_list
        Comma-separated emails

    Returns
    -------
    Trimmed, lower-cased emails in first-seen order, blanks dropped
    """
    seen: dict[str, None] = {}
    candidates = list(lines)
    if csv_list:
        candidates.extend(csv_list.split(","))
    for candidate in candidates:
        email = candidate.strip().lower()
        if email:
            seen.setdefault(email, None)
    return list(seen)


def build_rsvp_link(base_url: str, token: str) -> str:
    """Append the token as a query parameter to the RSVP page URL."""
    base = base_url[:-1] if base_url.endswith("/") else base_url
    return f"{base}?{TOKEN_QUERY_PARAM}={quote(token, safe='')}"


class RsvpLinkGenerator:
    """Issues personal RSVP links for a batch of recipients."""

    def __init__(self, token_service: RsvpTokenService, base_url: str):
        self._token_service = token_service
        self._base_url = base_url

    def generate(
        self,
        emails: Iterable[str],
        expires_at: int | datetime | None = None,
    ) -> list[RsvpLink]:
        links = [
            RsvpLink(
                email=email,
                link=build_rsvp_link(
                    self._base_url,
                    self._token_service.create_token(email, expires_at),
                ),
            )
            for email in emails
        ]
        logger.info("Generated %d RSVP links", len(links))
        return links


def write_csv(links: Iterable[RsvpLink], stream: TextIO) -> None:
    """Write an ``email,link`` CSV with a header row."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(["email", "link"])
    for item in links:
        writer.writerow([item.email, item.link])
