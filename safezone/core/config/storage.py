"""Credential persistence settings.
"""

from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings


class StorageSettings(BaseSettings):
    """Defines where the credential pair and cached profile are persisted.

    Security Note:
        - When STORAGE_BACKEND is "file", the credentials file is created with
          owner-only permissions; set CREDENTIAL_ENCRYPTION_KEY (a Fernet key)
          to encrypt values at rest.
        - REDIS_URL should include TLS parameters when Redis is reached over an
          untrusted network.
    """

    STORAGE_BACKEND: Literal["memory", "file", "redis"] = "memory"
    STORAGE_KEY_PREFIX: str = "@"
    STORAGE_FILE_PATH: str = "~/.safezone/credentials.json"
    REDIS_URL: str = "redis://localhost:6379/0"
    CREDENTIAL_ENCRYPTION_KEY: SecretStr = SecretStr("")
