"""
Tests for configuration and logging helpers.
"""

import logging
from unittest.mock import patch

import pytest

from app.core.config import EnvironmentSecretsManager, EventsConfig, ZeroSecretsManager
from app.core.logging import log_event_change, setup_logging


class TestEventsConfig:
    """Test cases for environment-backed configuration."""

    @pytest.fixture
    def env_config(self, monkeypatch):
        monkeypatch.delenv("ZERO_TOKEN", raising=False)
        for key in ("DATABASE_URL", "API_BASE_URL", "HTTP_TIMEOUT_SECONDS", "LOG_LEVEL", "CORS_ORIGINS"):
            monkeypatch.delenv(key, raising=False)
        return EventsConfig()

    def test_environment_manager_without_token(self, env_config):
        assert isinstance(env_config.secrets_manager, EnvironmentSecretsManager)

    def test_zero_manager_with_token(self, monkeypatch):
        monkeypatch.setenv("ZERO_TOKEN", "token-123")

        assert isinstance(EventsConfig().secrets_manager, ZeroSecretsManager)

    @pytest.mark.asyncio
    async def test_defaults(self, env_config):
        assert await env_config.get_database_url() == "sqlite:///./events.db"
        assert await env_config.get_api_base_url() == "http://localhost:8000/api"
        assert await env_config.get_http_timeout() == 10.0
        assert await env_config.get_log_level() == "INFO"
        assert env_config.get_cors_origins() == ["http://localhost:3000", "http://localhost:8000"]

    @pytest.mark.asyncio
    async def test_environment_overrides(self, env_config, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://u:p@db/events")
        monkeypatch.setenv("API_BASE_URL", "https://events.example.com/api/")
        monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example.com, https://b.example.com")

        assert await env_config.get_database_url() == "postgresql+psycopg://u:p@db/events"
        assert await env_config.get_api_base_url() == "https://events.example.com/api"
        assert await env_config.get_http_timeout() == 2.5
        assert await env_config.get_log_level() == "DEBUG"
        assert env_config.get_cors_origins() == ["https://a.example.com", "https://b.example.com"]


class TestZeroSecretsManager:
    """Test cases for the Zero-backed secrets manager."""

    @pytest.mark.asyncio
    async def test_get_secret_normalizes_key(self):
        manager = ZeroSecretsManager("token")

        with patch("app.core.config.zero") as mock_zero:
            mock_zero.return_value.fetch.return_value = {
                "events-manager": {"database-url": "sqlite:///zero.db"}
            }
            assert await manager.get_secret("DATABASE_URL") == "sqlite:///zero.db"
            assert await manager.get_secret("DATABASE_URL") == "sqlite:///zero.db"

        mock_zero.return_value.fetch.assert_called_once()

    @pytest.mark.asyncio
    async def test_fetch_failure_returns_none(self):
        manager = ZeroSecretsManager("token")

        with patch("app.core.config.zero", side_effect=Exception("network down")):
            assert await manager.get_secret("DATABASE_URL") is None


class TestLogging:
    """Test cases for logging helpers."""

    def test_setup_logging_level(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            logger = setup_logging("warning", "events")

            assert logger is root
            assert root.level == logging.WARNING
            assert len(root.handlers) == 1
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)

    def test_log_event_change(self, caplog):
        with caplog.at_level(logging.INFO, logger="events.audit"):
            log_event_change("updated", 5, {"title": "x", "category": "y"})

        record = caplog.records[-1]
        assert record.name == "events.audit"
        assert "Event updated" in record.getMessage()
        assert "'event_id': 5" in record.getMessage()
        assert "['category', 'title']" in record.getMessage()
