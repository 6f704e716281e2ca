"""Credential store backed by a key/value storage.

Three independent slots live under the configured prefix:

- ``<prefix>access_token``
- ``<prefix>refresh_token``
- ``<prefix>user_data`` (cached profile, JSON)

Both credentials are written through one atomic `set_many`, and `load`
only returns a pair when both slots hold a value.
"""

import json
from typing import Any, Dict, Optional

import structlog

from safezone.core.exceptions import StorageError
from safezone.domain.interfaces.credential_store import ICredentialStore
from safezone.domain.interfaces.storage import IKeyValueStorage
from safezone.domain.value_objects.credentials import CredentialPair

logger = structlog.get_logger(__name__)

ACCESS_TOKEN_SLOT = "access_token"
REFRESH_TOKEN_SLOT = "refresh_token"
USER_DATA_SLOT = "user_data"


class CredentialStore(ICredentialStore):
    def __init__(self, storage: IKeyValueStorage, key_prefix: str = "@"):
        self._storage = storage
        self._prefix = key_prefix

    def key(self, slot: str) -> str:
        return f"{self._prefix}{slot}"

    async def load(self) -> Optional[CredentialPair]:
        try:
            access = await self._storage.get(self.key(ACCESS_TOKEN_SLOT))
            refresh = await self._storage.get(self.key(REFRESH_TOKEN_SLOT))
        except Exception as e:
            logger.error("credential_load_failed", error=str(e))
            return None

        if not access or not refresh:
            if access or refresh:
                logger.warning("credential_pair_incomplete", has_access=bool(access), has_refresh=bool(refresh))
            return None
        return CredentialPair(access=access, refresh=refresh)

    async def save(self, access: str, refresh: str) -> CredentialPair:
        pair = CredentialPair(access=access, refresh=refresh)
        try:
            await self._storage.set_many(
                {
                    self.key(ACCESS_TOKEN_SLOT): pair.access,
                    self.key(REFRESH_TOKEN_SLOT): pair.refresh,
                }
            )
        except Exception as e:
            logger.error("credential_save_failed", error=str(e))
            raise StorageError() from e

        logger.info("credentials_saved", **pair.mask_for_logging())
        return pair

    async def clear(self) -> None:
        for slot in (ACCESS_TOKEN_SLOT, REFRESH_TOKEN_SLOT, USER_DATA_SLOT):
            try:
                await self._storage.delete(self.key(slot))
            except Exception as e:
                logger.error("credential_clear_failed", slot=slot, error=str(e))
        logger.info("credentials_cleared")

    async def save_profile(self, profile: Dict[str, Any]) -> None:
        try:
            await self._storage.set(self.key(USER_DATA_SLOT), json.dumps(profile, ensure_ascii=False))
        except Exception as e:
            logger.error("profile_save_failed", error=str(e))
            raise StorageError() from e

    async def load_profile(self) -> Optional[Dict[str, Any]]:
        try:
            raw = await self._storage.get(self.key(USER_DATA_SLOT))
        except Exception as e:
            logger.error("profile_load_failed", error=str(e))
            return None
        if not raw:
            return None
        try:
            profile = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("profile_cache_corrupt")
            return None
        return profile if isinstance(profile, dict) else None
