"""Pytest configuration and fixtures."""

import pytest

from core.config import get_settings

TEST_TOKEN = "test-token"
TEST_API_BASE = "https://api.test/v1"


@pytest.fixture(autouse=True)
def recurse_env(monkeypatch):
    """Point every test at a fake token and API base, read fresh each time."""
    monkeypatch.setenv("RECURSE_PAT", TEST_TOKEN)
    monkeypatch.setenv("RECURSE_API_BASE", TEST_API_BASE)
    monkeypatch.delenv("MCP_HOST", raising=False)
    monkeypatch.delenv("MCP_PORT", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
