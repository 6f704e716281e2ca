from __future__ import annotations

"""Factory for generating fake credential data for testing."""

from typing import Dict

from faker import Faker

fake = Faker()


def create_fake_token_pair(access_token: str = None, refresh_token: str = None) -> Dict[str, str]:
    """Create a refresh-endpoint style payload.

    Args:
        access_token (str, optional): Access token, defaults to a fake JWT-like string.
        refresh_token (str, optional): Refresh token, defaults to a fake JWT-like string.

    Returns:
        Dict[str, str]: ``{"accessToken": ..., "refreshToken": ...}``
    """
    return {
        "accessToken": access_token or f"eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.{fake.sha256()}.{fake.sha256()}",
        "refreshToken": refresh_token or f"eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.{fake.sha256()}.{fake.sha256()}",
    }
