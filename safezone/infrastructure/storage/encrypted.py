"""Encryption-at-rest wrapper for any key/value backend."""

from typing import Mapping, Optional

import structlog
from cryptography.fernet import Fernet, InvalidToken

from safezone.domain.interfaces.storage import IKeyValueStorage

logger = structlog.get_logger(__name__)


class EncryptedStorage(IKeyValueStorage):
    """Encrypts every value with Fernet before it reaches the inner backend.

    A value that cannot be decrypted (wrong key, tampered data) reads as
    missing, which the credential store treats as logged out.
    """

    def __init__(self, inner: IKeyValueStorage, key: bytes):
        self._inner = inner
        self._fernet = Fernet(key)

    async def get(self, key: str) -> Optional[str]:
        token = await self._inner.get(key)
        if token is None:
            return None
        try:
            return self._fernet.decrypt(token.encode()).decode()
        except InvalidToken:
            logger.warning("storage_decryption_failed", key=key)
            return None

    async def set(self, key: str, value: str) -> None:
        await self._inner.set(key, self._encrypt(value))

    async def delete(self, key: str) -> None:
        await self._inner.delete(key)

    async def set_many(self, values: Mapping[str, str]) -> None:
        await self._inner.set_many({k: self._encrypt(v) for k, v in values.items()})

    async def close(self) -> None:
        await self._inner.close()

    def _encrypt(self, value: str) -> str:
        return self._fernet.encrypt(value.encode()).decode()
