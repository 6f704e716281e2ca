"""Authentication service.

Wraps the ``/auth`` endpoints: email verification, registration, login,
logout, account lookup and password reset. Login and registration persist the
returned credential pair; logout always ends with a cleared local session.
"""

from typing import Any

import structlog

from safezone.core.exceptions import SafeZoneError
from safezone.domain.interfaces.credential_store import ICredentialStore
from safezone.domain.models.auth import (
    AuthResult,
    EmailVerificationRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    VerificationPurpose,
)
from safezone.domain.services.refresh_coordinator import RefreshCoordinator
from safezone.domain.value_objects.api_request import ApiRequest

logger = structlog.get_logger(__name__)


class AuthService:
    """Authentication endpoints of the SafeZone API.

    Args:
        coordinator: Request pipeline every call goes through.
        credential_store: Receives the pair returned by login/registration.
    """

    def __init__(self, coordinator: RefreshCoordinator, credential_store: ICredentialStore):
        self._coordinator = coordinator
        self._credential_store = credential_store

    async def send_email_verification(self, email: str, purpose: VerificationPurpose) -> Any:
        """Sends a verification code; callable without a session."""
        logger.info("email_verification_requested", purpose=purpose)
        return await self._coordinator.execute(
            ApiRequest(
                "/auth/email/send",
                method="POST",
                body={"email": email, "purpose": purpose},
                authenticated=False,
            )
        )

    async def verify_email_code(self, data: EmailVerificationRequest) -> Any:
        return await self._coordinator.execute(
            ApiRequest("/auth/email/verify", method="POST", body=data.to_payload(), authenticated=False)
        )

    async def register(self, data: RegisterRequest) -> AuthResult:
        logger.info("registration_requested", nickname=data.nickname)
        response = await self._coordinator.execute(
            ApiRequest("/auth/register", method="POST", body=data.to_payload(), authenticated=False)
        )
        return await self._establish_session(response)

    async def login(self, data: LoginRequest) -> AuthResult:
        logger.info("login_requested")
        response = await self._coordinator.execute(
            ApiRequest("/auth/login", method="POST", body=data.to_payload(), authenticated=False)
        )
        return await self._establish_session(response)

    async def logout(self) -> None:
        """Notifies the server, then clears local credentials regardless of the outcome."""
        try:
            await self._coordinator.execute(ApiRequest("/auth/logout", method="POST"))
        except SafeZoneError as e:
            logger.warning("logout_request_failed", error=str(e), code=e.code)
        finally:
            await self._credential_store.clear()

    async def find_id(self, email: str) -> Any:
        return await self._coordinator.execute(
            ApiRequest("/auth/find-id", method="POST", body={"email": email}, authenticated=False)
        )

    async def reset_password(self, data: ResetPasswordRequest) -> None:
        await self._coordinator.execute(
            ApiRequest("/auth/reset-password", method="POST", body=data.to_payload(), authenticated=False)
        )
        logger.info("password_reset_completed")

    async def _establish_session(self, response: Any) -> AuthResult:
        result = AuthResult.model_validate(response or {})
        tokens = result.tokens
        if tokens and tokens.access_token and tokens.refresh_token:
            await self._credential_store.save(tokens.access_token, tokens.refresh_token)
            if result.user:
                await self._credential_store.save_profile(result.user)
        else:
            logger.warning("auth_response_without_tokens")
        return result
