"""Credential value objects.

A credential pair is either fully present or absent; there is no value
object for a half pair, so a partial pair can never be passed around.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional


def mask_token(token: str) -> str:
    """Return a token masked for safe logging."""
    if len(token) <= 8:
        return "*" * len(token)
    return token[:4] + "*" * 4 + token[-4:]


@dataclass(frozen=True)
class CredentialPair:
    """Value object for the access/refresh bearer credentials.

    Both tokens are opaque strings and both are required.
    """

    access: str
    refresh: str

    def __post_init__(self):
        if not isinstance(self.access, str) or not self.access:
            raise ValueError("Access token cannot be empty")
        if not isinstance(self.refresh, str) or not self.refresh:
            raise ValueError("Refresh token cannot be empty")

    @classmethod
    def from_response(cls, payload: Optional[Mapping[str, Any]]) -> Optional["CredentialPair"]:
        """Build a pair from a ``{accessToken, refreshToken}`` payload.

        Returns None unless both tokens are non-empty strings.
        """
        if not isinstance(payload, Mapping):
            return None
        access = payload.get("accessToken")
        refresh = payload.get("refreshToken")
        if not isinstance(access, str) or not isinstance(refresh, str) or not access or not refresh:
            return None
        return cls(access=access, refresh=refresh)

    def mask_for_logging(self) -> dict:
        return {"access": mask_token(self.access), "refresh": mask_token(self.refresh)}

    def __repr__(self) -> str:
        masked = self.mask_for_logging()
        return f"CredentialPair(access={masked['access']!r}, refresh={masked['refresh']!r})"
