"""User profile service."""

from typing import Any, Optional

import structlog

from safezone.core.exceptions import StorageError
from safezone.domain.interfaces.credential_store import ICredentialStore
from safezone.domain.models.user import UpdateProfileRequest, UserProfile
from safezone.domain.services.refresh_coordinator import RefreshCoordinator
from safezone.domain.value_objects.api_request import ApiRequest

logger = structlog.get_logger(__name__)

PROFILE_ENDPOINT = "/users/me"


class UserService:
    def __init__(self, coordinator: RefreshCoordinator, credential_store: ICredentialStore):
        self._coordinator = coordinator
        self._credential_store = credential_store

    async def get_my_profile(self) -> UserProfile:
        """Fetches the profile and refreshes the cached copy; a failed cache write is only logged."""
        response = await self._coordinator.execute(ApiRequest(PROFILE_ENDPOINT))
        profile = UserProfile.model_validate(response)
        try:
            await self._credential_store.save_profile(profile.model_dump(by_alias=True))
        except StorageError as e:
            logger.warning("profile_cache_write_failed", error=str(e))
        return profile

    async def get_cached_profile(self) -> Optional[UserProfile]:
        cached = await self._credential_store.load_profile()
        if cached is None:
            return None
        return UserProfile.model_validate(cached)

    async def update_my_profile(self, data: UpdateProfileRequest) -> Any:
        payload = data.to_payload()
        logger.info("profile_update_requested", fields=sorted(payload))
        return await self._coordinator.execute(ApiRequest(PROFILE_ENDPOINT, method="PATCH", body=payload))

    async def delete_account(self) -> None:
        """Deletes the account; local credentials are cleared even if the call fails."""
        try:
            await self._coordinator.execute(ApiRequest(PROFILE_ENDPOINT, method="DELETE"))
        finally:
            await self._credential_store.clear()
