"""Pytest configuration and fixtures."""

import os

import pytest

# Set before test modules import the app, so import-time loggers see them too
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("MEDIATOR_ENV", "test")


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["SUPABASE_URL"] = "https://test.supabase.co"
    os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-key"
    os.environ["MEDIATOR_ENV"] = "test"
    os.environ["APP_BASE_URL"] = "https://mediator.test"
    os.environ["ELEVENLABS_AGENT_ID"] = "agent-test"
    os.environ.pop("OPENAI_API_KEY", None)
    os.environ.pop("MEMO_GENERATOR", None)

    from app.core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
