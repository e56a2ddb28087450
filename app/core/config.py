"""
Configuration management for the Events Manager.
Uses Zero Python SDK for secrets when a Zero token is available,
falling back to environment variables otherwise.
"""

import os
import asyncio
import concurrent.futures
from typing import Dict, Any, Optional, List
import logging
from zero_python_sdk import zero

logger = logging.getLogger(__name__)


class ZeroSecretsManager:
    """
    Zero secrets client using the official Zero Python SDK.
    """

    def __init__(self, zero_token: str, caller_name: str = "events-manager"):
        self.zero_token = zero_token
        self.caller_name = caller_name
        self._cache: Dict[str, Any] = {}
        self._secrets = None

    async def _fetch_secrets(self):
        """Fetch secrets from Zero if not already cached."""
        if self._secrets is None:
            try:
                loop = asyncio.get_event_loop()
                with concurrent.futures.ThreadPoolExecutor() as executor:
                    self._secrets = await loop.run_in_executor(
                        executor,
                        lambda: zero(
                            token=self.zero_token,
                            pick=["events-manager"],
                            caller_name=self.caller_name
                        ).fetch()
                    )
                logger.info("Successfully fetched secrets from Zero")
            except Exception as e:
                logger.error(f"Failed to fetch secrets from Zero: {e}")
                self._secrets = {}

    def _normalize_key(self, key: str) -> str:
        """Normalize a key to lowercase and replace underscores with hyphens."""
        return key.lower().replace("_", "-")

    async def get_secret(self, key: str) -> Optional[str]:
        """
        Get a secret value by key.

        Args:
            key: The secret key to retrieve

        Returns:
            Secret value or None if not found
        """
        key = self._normalize_key(key)
        if key in self._cache:
            return self._cache[key]

        await self._fetch_secrets()
        secret_value = self._secrets.get("events-manager", {}).get(key)

        if secret_value:
            self._cache[key] = secret_value

        return secret_value


class EnvironmentSecretsManager:
    """Reads configuration values straight from the process environment."""

    async def get_secret(self, key: str) -> Optional[str]:
        return os.getenv(key.upper())


class EventsConfig:
    """
    Events Manager configuration.
    Values resolve through Zero when ZERO_TOKEN is set, else through os.environ.
    """

    def __init__(self):
        self.zero_token = os.getenv("ZERO_TOKEN")
        if self.zero_token:
            self.secrets_manager = ZeroSecretsManager(self.zero_token)
        else:
            self.secrets_manager = EnvironmentSecretsManager()

    async def get_database_url(self) -> str:
        """Get the database connection URL."""
        return await self.secrets_manager.get_secret("DATABASE_URL") or "sqlite:///./events.db"

    async def get_api_base_url(self) -> str:
        """Get the base URL the UI client uses to reach the REST API."""
        url = await self.secrets_manager.get_secret("API_BASE_URL") or "http://localhost:8000/api"
        return url.rstrip("/")

    async def get_http_timeout(self) -> float:
        """Get the client HTTP timeout in seconds."""
        timeout = await self.secrets_manager.get_secret("HTTP_TIMEOUT_SECONDS")
        return float(timeout) if timeout else 10.0

    def get_cors_origins(self) -> List[str]:
        """
        Get CORS allowed origins.

        Read from the environment only, since middleware is installed at
        import time before any event loop exists.
        """
        origins = os.getenv("CORS_ORIGINS")
        if origins:
            return [origin.strip() for origin in origins.split(",")]
        return ["http://localhost:3000", "http://localhost:8000"]

    async def get_log_level(self) -> str:
        """Get the root log level name."""
        return (await self.secrets_manager.get_secret("LOG_LEVEL") or "INFO").upper()


# Global config instance
config = EventsConfig()
