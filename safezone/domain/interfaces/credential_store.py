"""Credential store interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from safezone.domain.value_objects.credentials import CredentialPair


class ICredentialStore(ABC):
    """Sole owner of the persisted credential pair and cached profile.

    Readers may see the pair change between two reads; each caller uses the
    value it read for the whole of one request.
    """

    @abstractmethod
    async def load(self) -> Optional[CredentialPair]:
        """Returns the stored pair, or None. Never raises."""
        raise NotImplementedError

    @abstractmethod
    async def save(self, access: str, refresh: str) -> CredentialPair:
        """Persists both credentials atomically.

        Raises:
            StorageError: If the pair could not be written; the previously
                stored pair is left untouched.
        """
        raise NotImplementedError

    @abstractmethod
    async def clear(self) -> None:
        """Removes credentials and cached profile. Never raises."""
        raise NotImplementedError

    @abstractmethod
    async def save_profile(self, profile: Dict[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    async def load_profile(self) -> Optional[Dict[str, Any]]:
        raise NotImplementedError
