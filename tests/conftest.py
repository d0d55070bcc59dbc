"""Root pytest configuration.

Test Structure:
    tests/
    └── unit/
        ├── rsvp_token/        # Core token tests (codec, key derivation, service)
        ├── rsvp_config/       # Settings loading
        └── rsvp_links/        # Link generation and CLI
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from rsvp_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Ensure every test sees settings built from its own environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()
