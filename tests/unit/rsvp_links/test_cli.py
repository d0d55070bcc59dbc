"""Unit tests for the rsvp CLI."""

import importlib
import logging
from datetime import timedelta
from urllib.parse import parse_qs, urlsplit

import pytest
from typer.testing import CliRunner

from rsvp_links.cli import app
from rsvp_links.links import RsvpLinkGenerator
from rsvp_token import RsvpTokenService

app_module = importlib.import_module("rsvp_links.cli.app")

runner = CliRunner()

SECRET = "cli-test-secret"


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setenv("RSVP_TOKEN_SECRET", SECRET)
    monkeypatch.setenv("RSVP_BASE_URL", "https://example.com/rsvp")


def _tokens_from_csv(text: str) -> dict[str, str]:
    rows = [line for line in text.splitlines() if "?t=" in line]
    tokens = {}
    for row in rows:
        email, link = row.split(",", 1)
        tokens[email] = parse_qs(urlsplit(link).query)["t"][0]
    return tokens


class TestLinksGenerate:
    """Tests for `rsvp links generate`."""

    def test_generates_csv_from_emails(self, configured):
        """Test CSV output for comma-separated emails."""
        result = runner.invoke(
            app, ["links", "generate", "--emails", "Alice@Example.com,bob@example.com"]
        )

        assert result.exit_code == 0
        assert "email,link" in result.output
        tokens = _tokens_from_csv(result.output)
        service = RsvpTokenService(SECRET)
        assert {service.resolve_token(t) for t in tokens.values()} == {
            "alice@example.com",
            "bob@example.com",
        }

    def test_reads_input_file_and_writes_output(self, configured, tmp_path):
        """Test file input and --output."""
        attendees = tmp_path / "attendees.txt"
        attendees.write_text("alice@example.com\n\nBOB@example.com\r\n", encoding="utf-8")
        output = tmp_path / "links.csv"

        result = runner.invoke(
            app,
            [
                "links",
                "generate",
                "--input",
                str(attendees),
                "--base-url",
                "https://other.example/rsvp/",
                "--output",
                str(output),
            ],
        )

        assert result.exit_code == 0
        assert "Wrote 2 links" in result.output
        lines = output.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "email,link"
        assert lines[1].startswith("alice@example.com,https://other.example/rsvp?t=")
        assert lines[2].startswith("bob@example.com,https://other.example/rsvp?t=")

    def test_expires_at_is_applied(self, configured):
        """Test that a past --expires-at yields expired tokens."""
        result = runner.invoke(
            app,
            [
                "links",
                "generate",
                "--emails",
                "alice@example.com",
                "--expires-at",
                "2000-01-01T00:00:00+00:00",
            ],
        )

        assert result.exit_code == 0
        token = _tokens_from_csv(result.output)["alice@example.com"]
        assert RsvpTokenService(SECRET).resolve(token).is_expired

    def test_invalid_expires_at(self, configured):
        """Test that a non-ISO expiry exits with an error."""
        result = runner.invoke(
            app,
            ["links", "generate", "--emails", "a@example.com", "--expires-at", "soon"],
        )

        assert result.exit_code == 1
        assert "Invalid --expires-at" in result.output

    def test_no_emails(self, configured):
        """Test that an empty recipient list exits with an error."""
        result = runner.invoke(app, ["links", "generate", "--emails", " , "])

        assert result.exit_code == 1
        assert "No emails provided" in result.output

    def test_missing_secret(self, monkeypatch):
        """Test that a missing secret exits with an error."""
        monkeypatch.setenv("RSVP_TOKEN_SECRET", "")

        result = runner.invoke(app, ["links", "generate", "--emails", "a@example.com"])

        assert result.exit_code == 1
        assert "RSVP_TOKEN_SECRET" in result.output


class TestTokensResolve:
    """Tests for `rsvp tokens resolve`."""

    def test_resolves_valid_token(self, configured):
        token = RsvpTokenService(SECRET).create_token("guest@example.com", 2**41)

        result = runner.invoke(app, ["tokens", "resolve", "--", token])

        assert result.exit_code == 0
        assert result.output.strip() == "guest@example.com"

    def test_rejects_invalid_token(self, configured):
        result = runner.invoke(app, ["tokens", "resolve", "not-a-token"])

        assert result.exit_code == 1
        assert "invalid_format" in result.output

    def test_reports_expired_token(self, configured):
        token = RsvpTokenService(SECRET).create_token("guest@example.com", 0)

        result = runner.invoke(app, ["tokens", "resolve", "--", token])

        assert result.exit_code == 1
        assert "token_expired" in result.output

    def test_missing_secret_reports_configuration(self, monkeypatch):
        """Test that a missing secret names the setting, not a guest message."""
        monkeypatch.setenv("RSVP_TOKEN_SECRET", "")

        result = runner.invoke(app, ["tokens", "resolve", "not-a-token"])

        assert result.exit_code == 1
        assert "RSVP_TOKEN_SECRET" in result.output
        assert "not valid" not in result.output


class TestSecretsGenerate:
    """Tests for `rsvp secrets generate`."""

    def test_prints_secret(self):
        result = runner.invoke(app, ["secrets", "generate"])

        assert result.exit_code == 0
        assert "RSVP_TOKEN_SECRET=" in result.output


class TestLoggingSetup:
    """Tests for CLI logging configuration."""

    def test_invoking_app_leaves_root_handlers_untouched(self, capsys):
        """Test that running the app in-process keeps logging usable afterwards."""
        handlers = list(logging.getLogger().handlers)

        result = runner.invoke(app, ["secrets", "generate"])

        assert result.exit_code == 0
        assert logging.getLogger().handlers == handlers

        service = RsvpTokenService("test-secret", timedelta(days=1))
        RsvpLinkGenerator(service, "https://example.com/rsvp").generate(
            ["guest@example.com"]
        )
        assert "Logging error" not in capsys.readouterr().err

    def test_cli_entry_point_configures_logging(self, monkeypatch):
        """Test that the console script sets up logging before running."""
        calls = []
        monkeypatch.setattr(
            app_module, "_configure_logging", lambda: calls.append("logging")
        )
        monkeypatch.setattr(app_module, "app", lambda: calls.append("app"))

        app_module.cli()

        assert calls == ["logging", "app"]
