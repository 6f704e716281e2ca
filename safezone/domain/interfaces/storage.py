"""Key/value persistence interface."""

from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

import structlog

logger = structlog.get_logger(__name__)


class IKeyValueStorage(ABC):
    """Asynchronous string key/value store.

    Backends with native transactions override `set_many`; the default
    implementation writes keys one by one and restores the previous values
    when a write fails, so callers never observe a partially applied batch.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, key: str) -> None:
        raise NotImplementedError

    async def set_many(self, values: Mapping[str, str]) -> None:
        """Writes every key or none of them.

        Raises:
            Exception: The error of the failed write, after rollback.
        """
        snapshot: Dict[str, Optional[str]] = {key: await self.get(key) for key in values}
        written = []
        try:
            for key, value in values.items():
                await self.set(key, value)
                written.append(key)
        except Exception:
            for key in reversed(written):
                previous = snapshot[key]
                try:
                    if previous is None:
                        await self.delete(key)
                    else:
                        await self.set(key, previous)
                except Exception as rollback_error:
                    logger.error("storage_rollback_failed", key=key, error=str(rollback_error))
            raise

    async def close(self) -> None:
        """Release backend resources."""
