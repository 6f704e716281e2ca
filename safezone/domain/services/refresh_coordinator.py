"""Single-flight credential refresh for the request pipeline.

The coordinator wraps a request executor. When an authenticated call is
rejected with 401 it makes sure at most one refresh-credential exchange is in
flight, parks every other rejected caller until that exchange settles, and
then replays each parked call with the new access credential, or fails them
all when the exchange fails.

State Transitions:
- IDLE: no exchange outstanding, queue empty.
- REFRESHING: the first caller to observe 401 became the refresher and is
  waiting for ``POST /auth/refresh``. Later 401s are queued.
- DRAINING: the exchange settled; queued callers are being resolved or
  rejected. Callers arriving now are still queued and settled in this pass.

All transitions run on one event loop. The check of `refresh_in_flight` and
the switch to REFRESHING happen with no suspension point in between, which is
what makes the guard atomic with respect to other tasks. The coordinator is
not thread-safe; share one instance per event loop.
"""

import asyncio
from collections import deque
from enum import Enum
from typing import Any, Callable, Deque, Optional

import structlog

from safezone.core.exceptions import (
    ForbiddenError,
    RefreshError,
    SessionExpiredError,
    UnauthorizedError,
)
from safezone.domain.interfaces.credential_store import ICredentialStore
from safezone.domain.interfaces.notifications import INotificationDispatcher, Notification
from safezone.domain.interfaces.request_executor import IRequestExecutor
from safezone.domain.value_objects.api_request import ApiRequest, PendingRequest
from safezone.domain.value_objects.credentials import CredentialPair, mask_token
from safezone.utils.i18n import get_translated_message

logger = structlog.get_logger(__name__)

SESSION_EXPIRED_EVENT = "session_expired"


class RefreshState(str, Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"
    DRAINING = "draining"


class RefreshCoordinator:
    """Executes API requests, refreshing the access credential on 401.

    Args:
        executor: Performs the individual HTTP calls.
        credential_store: Owner of the credential pair.
        notification_dispatcher: Receives the "session expired" signal when a
            refresh fails. Optional.
        refresh_endpoint: Path of the refresh exchange below ``/api``.
        refresh_timeout: Upper bound in seconds for one exchange; exceeding it
            counts as a failed refresh.
    """

    def __init__(
        self,
        executor: IRequestExecutor,
        credential_store: ICredentialStore,
        notification_dispatcher: Optional[INotificationDispatcher] = None,
        refresh_endpoint: str = "/auth/refresh",
        refresh_timeout: float = 10.0,
    ):
        self._executor = executor
        self._credential_store = credential_store
        self._notification_dispatcher = notification_dispatcher
        self._refresh_endpoint = refresh_endpoint
        self._refresh_timeout = refresh_timeout

        self._state = RefreshState.IDLE
        self._queue: Deque[PendingRequest] = deque()
        self._exchange_count = 0
        # Access token of the last session ended by a failed refresh.
        self._expired_token: Optional[str] = None

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def refresh_in_flight(self) -> bool:
        return self._state is not RefreshState.IDLE

    @property
    def pending_count(self) -> int:
        return len(self._queue)

    @property
    def exchange_count(self) -> int:
        """Number of refresh exchanges sent to the server so far."""
        return self._exchange_count

    async def execute(self, request: ApiRequest) -> Any:
        """Executes a request, transparently recovering from an expired credential.

        Returns:
            The decoded response body, or None.

        Raises:
            SessionExpiredError: The refresh exchange failed; local
                credentials have been cleared.
            ForbiddenError: The replay with a fresh credential was still
                rejected (``code="reauthentication_rejected"``).
            ApiError, NetworkError: Any other failure, unchanged.
        """
        used_token: Optional[str] = None
        if request.uses_stored_credential:
            pair = await self._credential_store.load()
            used_token = pair.access if pair else None

        try:
            return await self._executor.execute(request, access_token=used_token)
        except UnauthorizedError:
            # Nothing to refresh: public call, explicit header, or no session.
            if used_token is None:
                raise
            logger.info("access_token_rejected", request=request.describe(), token=mask_token(used_token))

        return await self._recover(request, used_token)

    async def _recover(self, request: ApiRequest, stale_token: str) -> Any:
        if stale_token == self._expired_token and await self._credential_store.load() is None:
            # Late 401 for a session that was already expired and signalled.
            logger.info("session_already_expired", request=request.describe(), token=mask_token(stale_token))
            raise SessionExpiredError()

        if self.refresh_in_flight:
            pending = PendingRequest.create(request)
            self._queue.append(pending)
            logger.info(
                "request_queued_for_refresh",
                request=request.describe(),
                pending=len(self._queue),
                state=self._state.value,
            )
            access_token = await pending.future
            return await self._replay(pending.request, access_token)

        self._state = RefreshState.REFRESHING
        logger.info("credential_refresh_started", request=request.describe())
        try:
            try:
                access_token = await self._refresh(stale_token)
            except Exception as e:
                self._state = RefreshState.DRAINING
                self._expired_token = stale_token
                await self._expire_session(e)
                self._reject_pending(lambda: self._session_expired_from(e))
                raise SessionExpiredError() from e

            self._state = RefreshState.DRAINING
            resolved = self._resolve_pending(access_token)
            logger.info("credential_refresh_succeeded", resolved=resolved)
        finally:
            # Reached with unsettled waiters only when the refresher was cancelled.
            self._reject_pending(lambda: RefreshError(code="refresh_interrupted"))
            self._queue.clear()
            self._state = RefreshState.IDLE

        return await self._replay(request.without_authorization(), access_token)

    async def _refresh(self, stale_token: str) -> str:
        pair = await self._credential_store.load()

        if pair is not None and pair.access != stale_token:
            logger.info("credential_already_refreshed", token=mask_token(pair.access))
            return pair.access

        if pair is None:
            raise RefreshError(code="refresh_token_missing")

        self._exchange_count += 1
        exchange = ApiRequest(
            self._refresh_endpoint,
            method="POST",
            body={"refreshToken": pair.refresh},
            authenticated=False,
        )
        try:
            payload = await asyncio.wait_for(self._executor.execute(exchange), timeout=self._refresh_timeout)
        except asyncio.TimeoutError as e:
            raise RefreshError(code="refresh_timeout") from e

        new_pair = CredentialPair.from_response(payload)
        if new_pair is None:
            raise RefreshError(code="refresh_response_invalid")

        await self._credential_store.save(new_pair.access, new_pair.refresh)
        return new_pair.access

    async def _replay(self, request: ApiRequest, access_token: str) -> Any:
        try:
            return await self._executor.execute(request, access_token=access_token)
        except UnauthorizedError as e:
            logger.warning("replay_rejected_after_refresh", request=request.describe())
            raise ForbiddenError(
                get_translated_message("reauthentication_rejected"),
                status_code=e.status_code,
                code="reauthentication_rejected",
            ) from e

    async def _expire_session(self, error: Exception) -> None:
        logger.error(
            "credential_refresh_failed",
            error=str(error),
            error_type=type(error).__name__,
            code=getattr(error, "code", None),
            pending=len(self._queue),
        )
        await self._credential_store.clear()

        if self._notification_dispatcher is None:
            return
        notification = Notification(
            event=SESSION_EXPIRED_EVENT,
            title=get_translated_message("session_expired_title"),
            message=get_translated_message("session_expired"),
        )
        try:
            await self._notification_dispatcher.send(notification)
        except Exception as e:
            logger.error("session_expired_notification_failed", error=str(e))

    def _resolve_pending(self, access_token: str) -> int:
        resolved = 0
        while self._queue:
            if self._queue.popleft().resolve(access_token):
                resolved += 1
        return resolved

    def _reject_pending(self, error_factory: Callable[[], BaseException]) -> int:
        rejected = 0
        while self._queue:
            if self._queue.popleft().reject(error_factory()):
                rejected += 1
        return rejected

    @staticmethod
    def _session_expired_from(error: Exception) -> SessionExpiredError:
        expired = SessionExpiredError()
        expired.__cause__ = error
        return expired
