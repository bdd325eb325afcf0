"""
Configuration management for the Events Registry API.
Reads environment variables first and falls back to Zero secrets when a
ZERO_TOKEN is available.
"""

import os
import asyncio
import concurrent.futures
from urllib.parse import quote_plus
from typing import Dict, Any, List, Optional
import logging

logger = logging.getLogger(__name__)


class ZeroSecretsManager:
    """
    Zero secrets client using the official Zero Python SDK.
    Secrets are fetched once and cached for the lifetime of the process.
    """

    def __init__(self, zero_token: str, caller_name: str = "evently"):
        self.zero_token = zero_token
        self.caller_name = caller_name
        self._cache: Dict[str, Any] = {}
        self._secrets = None

    async def _fetch_secrets(self):
        """Fetch secrets from Zero if not already cached."""
        if self._secrets is None:
            from zero_python_sdk import zero

            try:
                loop = asyncio.get_running_loop()
                with concurrent.futures.ThreadPoolExecutor() as executor:
                    self._secrets = await loop.run_in_executor(
                        executor,
                        lambda: zero(
                            token=self.zero_token,
                            pick=["evently"],
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
        secret_value = self._secrets.get("evently", {}).get(key)

        if secret_value:
            self._cache[key] = secret_value

        return secret_value


class ServiceConfig:
    """
    Configuration for the Events Registry API.
    Environment variables always win over Zero secrets.
    """

    def __init__(self):
        zero_token = os.getenv("ZERO_TOKEN")
        self.secrets_manager: Optional[ZeroSecretsManager] = (
            ZeroSecretsManager(zero_token) if zero_token else None
        )

    async def get_value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Resolve a configuration value from the environment, then Zero."""
        value = os.getenv(key)
        if value:
            return value

        if self.secrets_manager is not None:
            value = await self.secrets_manager.get_secret(key)
            if value:
                return value

        return default

    async def get_database_url(self) -> str:
        """Get the database connection URL."""
        url = await self.get_value("DATABASE_URL")
        if url:
            return url

        host = await self.get_value("DB_HOST", "localhost")
        port = await self.get_value("DB_PORT", "5432")
        name = await self.get_value("DB_NAME", "evently")
        user = await self.get_value("DB_USER", "evently")
        password = await self.get_value("DB_PASSWORD", "evently123")

        return f"postgresql://{user}:{quote_plus(password)}@{host}:{port}/{name}"

    async def get_jwt_secret(self) -> str:
        """Get JWT secret key."""
        return await self.get_value("JWT_SECRET", "your-secret-key-change-in-production")

    async def get_jwt_algorithm(self) -> str:
        """Get JWT algorithm."""
        return await self.get_value("JWT_ALGORITHM", "HS256")

    def get_cors_origins(self) -> List[str]:
        """Get CORS allowed origins."""
        origins = os.getenv("CORS_ORIGINS")
        if origins:
            return [origin.strip() for origin in origins.split(",") if origin.strip()]
        return ["http://localhost:3000", "http://localhost:8080"]


# Global config instance
config = ServiceConfig()
