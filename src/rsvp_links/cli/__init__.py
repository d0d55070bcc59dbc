"""Command line interface for RSVP link tooling."""

from rsvp_links.cli.app import app, cli

__all__ = ["app", "cli"]
