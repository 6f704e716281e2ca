"""Test doubles for the request pipeline."""

import asyncio
from typing import Any, List, Optional, Tuple

from safezone.core.exceptions import UnauthorizedError
from safezone.domain.interfaces.request_executor import IRequestExecutor
from safezone.domain.value_objects.api_request import ApiRequest

REFRESH_ENDPOINT = "/auth/refresh"
STALE_ACCESS = "access-1"
OLD_REFRESH = "refresh-1"


class FakeBackend(IRequestExecutor):
    """In-process executor standing in for the SafeZone API.

    Protected endpoints accept only `valid_access`; everything else is a 401.
    The refresh endpoint returns `new_pair` after `refresh_delay` seconds, or
    raises `refresh_error`. Every call yields to the event loop once before
    answering, so concurrent callers interleave the way real network calls do.
    """

    def __init__(
        self,
        valid_access: str = "access-2",
        new_pair: Optional[Tuple[str, str]] = ("access-2", "refresh-2"),
        refresh_error: Optional[Exception] = None,
        refresh_delay: float = 0.01,
        reject_everything: bool = False,
    ):
        self.valid_access = valid_access
        self.new_pair = new_pair
        self.refresh_error = refresh_error
        self.refresh_delay = refresh_delay
        self.reject_everything = reject_everything

        self.calls: List[Tuple[ApiRequest, Optional[str]]] = []
        self.refresh_bodies: List[Any] = []

    @property
    def refresh_calls(self) -> int:
        return len(self.refresh_bodies)

    def tokens_seen(self, endpoint: str) -> List[Optional[str]]:
        return [token for request, token in self.calls if request.endpoint == endpoint]

    async def execute(self, request: ApiRequest, access_token: Optional[str] = None) -> Any:
        self.calls.append((request, access_token))
        await asyncio.sleep(0)

        if request.endpoint == REFRESH_ENDPOINT:
            self.refresh_bodies.append(request.body)
            await asyncio.sleep(self.refresh_delay)
            if self.refresh_error is not None:
                raise self.refresh_error
            if self.new_pair is None:
                return {"accessToken": "only-access"}
            return {"accessToken": self.new_pair[0], "refreshToken": self.new_pair[1]}

        if self.reject_everything or access_token != self.valid_access:
            raise UnauthorizedError()
        return {"endpoint": request.endpoint, "token": access_token}


async def wait_for_pending(coordinator, count: int, timeout: float = 1.0) -> None:
    """Polls until `count` callers are parked in the coordinator's queue."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while coordinator.pending_count < count:
        if loop.time() > deadline:
            raise AssertionError(f"expected {count} pending requests, got {coordinator.pending_count}")
        await asyncio.sleep(0.001)
