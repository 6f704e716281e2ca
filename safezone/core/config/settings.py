"""Main client settings and configuration management.

This module composes the settings from the different modules (app, api,
storage) into a single, accessible `Settings` class.

It loads settings from environment variables and .env files, validates them,
and provides a single `settings` object used as the default everywhere a
component is built without an explicit configuration.

Environment Support:
- Development: Uses .env
- Test: Uses .env.test
- Staging: Uses .env.staging
- Production: Uses .env.production
"""

import logging
import os
from pathlib import Path

from pydantic_settings import SettingsConfigDict

from .api import ApiSettings
from .app import AppSettings
from .storage import StorageSettings

logger = logging.getLogger(__name__)


class Settings(AppSettings, ApiSettings, StorageSettings):
    """The main settings class that aggregates all client configurations.

    It inherits from all the specialized settings classes, providing a unified
    interface to all configuration parameters.

    Usage:
        - Access settings via the module-level instance `settings`, or build a
          dedicated `Settings(...)` and hand it to `SafeZoneClient`.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    def validate_required_fields(self) -> None:
        """Checks the fields a production client cannot run without.

        Raises:
            ValueError: If a required field is missing outside of development
                and test environments.
        """
        required_fields = ["API_BASE_URL", "API_PREFIX"]
        missing_fields = [field for field in required_fields if not getattr(self, field, None)]

        if self.STORAGE_BACKEND == "redis" and not self.REDIS_URL:
            missing_fields.append("REDIS_URL")

        if missing_fields:
            error_msg = f"Missing required environment variables: {', '.join(missing_fields)}"
            if self.APP_ENV in ("development", "test"):
                logger.warning(f"{self.APP_ENV} mode: {error_msg}")
            else:
                logger.error(error_msg)
                raise ValueError(error_msg)

        if self.APP_ENV == "production" and not self.API_BASE_URL.startswith("https://"):
            raise ValueError("API_BASE_URL must use https in production")


def create_settings() -> Settings:
    """Create settings instance with environment-specific configuration.

    Returns:
        Settings: Configured settings instance
    """
    env = os.getenv("APP_ENV", "development")

    env_files = {
        "development": ".env",
        "test": ".env.test",
        "staging": ".env.staging",
        "production": ".env.production",
    }

    env_file = env_files.get(env, ".env")

    if env != "development" and Path(env_file).exists():
        logger.info(f"Loading environment configuration from {env_file}")
        settings_instance = Settings(_env_file=env_file)
    elif Path(".env").exists():
        logger.info(f"Loading environment configuration from .env (environment: {env})")
        settings_instance = Settings()
    else:
        logger.debug(f"No .env file found, using environment variables only (environment: {env})")
        settings_instance = Settings()

    return settings_instance


settings = create_settings()
settings.validate_required_fields()
