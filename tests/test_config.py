"""
Tests for environment-backed configuration accessors.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from freshdesk_client.utils import config


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("freshdesk_client.utils.config.load_dotenv", MagicMock())


def test_required_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FRESHDESK_SUBDOMAIN", "  acme ")
    monkeypatch.setenv("FRESHDESK_API_KEY", "abc123")
    assert config.freshdesk_subdomain() == "acme"
    assert config.freshdesk_api_key() == "abc123"


def test_required_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FRESHDESK_SUBDOMAIN", "   ")
    with pytest.raises(ValueError, match="FRESHDESK_SUBDOMAIN"):
        config.freshdesk_subdomain()


def test_retry_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("FRESHDESK_MAX_RETRIES", "FRESHDESK_BACKOFF_FACTOR", "FRESHDESK_BACKOFF_MAX"):
        monkeypatch.delenv(key, raising=False)
    assert config.freshdesk_max_retries() == 4
    assert config.freshdesk_backoff_factor() == 1.0
    assert config.freshdesk_backoff_max() == 30.0


def test_invalid_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FRESHDESK_MAX_RETRIES", "lots")
    monkeypatch.setenv("FRESHDESK_BACKOFF_FACTOR", "fast")
    assert config.freshdesk_max_retries() == 4
    assert config.freshdesk_backoff_factor() == 1.0


def test_load_config_reads_project_env() -> None:
    config.load_config()
    env_path = config.load_dotenv.call_args[0][0]
    assert env_path == config._project_root() / ".env"
