from pathlib import Path
from dotenv import load_dotenv
import pytest

# Load environment variables for tests
load_dotenv(Path(__file__).resolve().parents[1] / '.env.test')


@pytest.fixture
def maps_key(monkeypatch):
    """Configure a throwaway server-side Google Maps key."""
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "test-key")
    return "test-key"


@pytest.fixture
def no_maps_key(monkeypatch):
    """Remove the key from both the environment and loaded settings."""
    from findride.core import config

    monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)
    monkeypatch.setattr(config.settings, "GOOGLE_MAPS_API_KEY", "")
