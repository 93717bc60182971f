"""Test configuration and fixtures."""

import json
from uuid import UUID

import pytest

from interaction.domain.value import UserId

# Configured as the only moderator for every test
MODERATOR_ID = UserId(UUID("7d2b4c1e-9a0f-4f3e-8b6d-2c5a1e9f0b42"))


@pytest.fixture(autouse=True)
def test_settings_env(monkeypatch):
    """Point settings at test values without touching a real .env."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("MODERATION", json.dumps({"moderator_ids": [str(MODERATOR_ID)]}))
    monkeypatch.delenv("EVENTS__BROKER_URL", raising=False)
    monkeypatch.delenv("DIRECTORY__BASE_URL", raising=False)
