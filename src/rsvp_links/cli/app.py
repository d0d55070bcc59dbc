"""RSVP CLI application using Typer.

This module provides command-line utilities for issuing personal RSVP
links, checking tokens and generating the token secret.
"""

import logging
import secrets
import sys
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console

from rsvp_config import get_settings
from rsvp_links.factory import build_token_service
from rsvp_links.links import RsvpLinkGenerator, collect_emails, write_csv
from rsvp_token import ConfigurationError, RsvpTokenError

app = typer.Typer(
    name="rsvp",
    help="RSVP - personal RSVP link tooling",
    no_args_is_help=True,
)
console = Console(stderr=True)

links_app = typer.Typer(
    name="links",
    help="Personal RSVP link generation",
    no_args_is_help=True,
)
tokens_app = typer.Typer(
    name="tokens",
    help="RSVP token inspection",
    no_args_is_help=True,
)
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(links_app)
app.add_typer(tokens_app)
app.add_typer(secrets_app)

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure CLI logging.

    Logs go to the current stderr so CSV written to stdout stays clean.
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    logging.getLogger("rsvp_token").setLevel(log_level)
    logging.getLogger("rsvp_links").setLevel(log_level)


@app.callback()
def main() -> None:
    """Personal RSVP link tooling."""


def _parse_expires_at(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        console.print("[red]Invalid --expires-at value. Use an ISO datetime.[/red]")
        raise typer.Exit(code=1) from None


@links_app.command("generate")
def generate_links(
    input_file: Path | None = typer.Option(
        None,
        "--input",
        help="File with one email per line",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    emails: str = typer.Option("", "--emails", help="Comma-separated emails"),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        help="RSVP page URL (default: RSVP_BASE_URL setting)",
    ),
    expires_at: str | None = typer.Option(
        None,
        "--expires-at",
        help="Token expiration datetime (ISO-8601)",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        help="Write CSV to file instead of stdout",
        dir_okay=False,
    ),
) -> None:
    """Generate personal RSVP links with encrypted identity tokens.

    Requires RSVP_TOKEN_SECRET to be configured.
    """
    settings = get_settings()
    try:
        token_service = build_token_service(settings)
    except ConfigurationError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(code=1) from e

    lines = input_file.read_text(encoding="utf-8").splitlines() if input_file else []
    recipients = collect_emails(lines, emails)
    if not recipients:
        console.print("[red]No emails provided. Use --input or --emails.[/red]")
        raise typer.Exit(code=1)

    expiry = _parse_expires_at(expires_at)
    generator = RsvpLinkGenerator(token_service, base_url or settings.rsvp_base_url)
    links = generator.generate(recipients, expiry)

    if output is None:
        write_csv(links, sys.stdout)
        return

    with output.open("w", encoding="utf-8", newline="") as stream:
        write_csv(links, stream)
    console.print(f"[green]Wrote {len(links)} links to {output}[/green]")


@tokens_app.command("resolve")
def resolve_token(token: str = typer.Argument(..., help="Token from an RSVP link")) -> None:
    """Print the email carried by a token, or why it was rejected.

    Tokens may start with "-"; pass them after "--".
    """
    try:
        email = build_token_service().resolve_token(token)
    except ConfigurationError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(code=1) from e
    except RsvpTokenError as e:
        console.print(f"[red]{e.kind.value}[/red]: {e.user_message}")
        raise typer.Exit(code=1) from e
    typer.echo(email)


@secrets_app.command("generate")
def generate_secret() -> None:
    """Generate a secure RSVP_TOKEN_SECRET value.

    Copy the output to your .env file.
    """
    typer.echo(f"RSVP_TOKEN_SECRET={secrets.token_urlsafe(32)}")
    console.print(
        "[yellow]Keep this secret secure. Changing it invalidates every "
        "link issued so far.[/yellow]"
    )


def cli() -> None:
    """Entry point for the CLI application."""
    _configure_logging()
    app()


if __name__ == "__main__":
    cli()
