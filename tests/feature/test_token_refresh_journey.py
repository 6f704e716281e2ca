"""End-to-end journeys through `SafeZoneClient` against an in-process API."""

import asyncio
import json

import httpx
import pytest
import pytest_asyncio

from safezone import SafeZoneClient
from safezone.core.exceptions import ForbiddenError, NotFoundError, SessionExpiredError, get_error_message
from safezone.domain.models.auth import LoginRequest
from safezone.domain.models.location import NearbyParams
from safezone.domain.services.refresh_coordinator import SESSION_EXPIRED_EVENT
from safezone.infrastructure.storage.memory import MemoryStorage

PROFILE = {"id": 7, "name": "Kim", "nickname": "walker", "email": "kim@example.com", "phone": "01012345678"}


class FakeSafeZoneApi:
    """Async MockTransport handler with rotating credentials."""

    def __init__(self):
        self.generation = 1
        self.revoked = False
        self.reject_all = False
        self.expired = None
        self.refresh_requests = 0
        self.seen = []

    @property
    def access(self) -> str:
        return f"access-{self.generation}"

    @property
    def refresh(self) -> str:
        return f"refresh-{self.generation}"

    def expire_access_token(self) -> None:
        """Server-side expiry: the current access token stops working, its refresh token still works."""
        self.expired = self.generation

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.seen.append((request.method, path, request.headers.get("Authorization")))

        if path == "/api/auth/login":
            return httpx.Response(
                200,
                json={"tokens": {"accessToken": self.access, "refreshToken": self.refresh}, "user": PROFILE},
            )

        if path == "/api/auth/refresh":
            self.refresh_requests += 1
            await asyncio.sleep(0.05)
            body = json.loads(request.content)
            if self.revoked or body.get("refreshToken") != self.refresh:
                return httpx.Response(401, json={"message": "invalid refresh token"})
            self.generation += 1
            return httpx.Response(200, json={"accessToken": self.access, "refreshToken": self.refresh})

        await asyncio.sleep(0.01)
        bearer = request.headers.get("Authorization")
        if self.reject_all or self.expired == self.generation or bearer != f"Bearer {self.access}":
            return httpx.Response(401, json={"message": "jwt expired"})

        if path == "/api/auth/logout":
            return httpx.Response(204)
        if path == "/api/users/me":
            return httpx.Response(200, json=PROFILE)
        if path == "/api/bords":
            return httpx.Response(200, json={"items": [], "totalCount": 0, "page": 1, "pageSize": 10})
        if path == "/api/locations/cctv/nearby":
            return httpx.Response(200, json=[])
        return httpx.Response(404, json={"message": "Not Found"})

    def calls_to(self, path: str):
        return [auth for method, p, auth in self.seen if p == path]


@pytest.fixture
def api():
    return FakeSafeZoneApi()


@pytest_asyncio.fixture
async def client(api, test_settings, dispatcher):
    http_client = httpx.AsyncClient(base_url=test_settings.API_BASE_URL, transport=httpx.MockTransport(api))
    async with SafeZoneClient(
        settings=test_settings,
        storage=MemoryStorage(),
        notification_dispatcher=dispatcher,
        http_client=http_client,
    ) as safezone:
        yield safezone
    await http_client.aclose()


async def login(client):
    await client.auth.login(LoginRequest(email="kim@example.com", password="Passw0rd!"))


@pytest.mark.asyncio
async def test_login_profile_logout(client, api):
    # Act
    await login(client)
    profile = await client.users.get_my_profile()
    authenticated_before = await client.is_authenticated()
    await client.auth.logout()

    # Assert
    assert profile.nickname == "walker"
    assert authenticated_before is True
    assert await client.is_authenticated() is False
    assert api.calls_to("/api/users/me") == ["Bearer access-1"]
    assert api.calls_to("/api/auth/logout") == ["Bearer access-1"]


@pytest.mark.asyncio
async def test_concurrent_requests_with_expired_token_share_one_refresh(client, api):
    # Arrange
    await login(client)
    api.expire_access_token()

    # Act
    profile, page, cctv = await asyncio.gather(
        client.users.get_my_profile(),
        client.board.get_posts(),
        client.locations.get_nearby_cctv(NearbyParams(latitude=37.57, longitude=126.97)),
    )

    # Assert
    assert api.refresh_requests == 1
    assert client.coordinator.exchange_count == 1
    assert profile.id == 7
    assert page.total == 0
    assert cctv == []
    for path in ("/api/users/me", "/api/bords", "/api/locations/cctv/nearby"):
        assert api.calls_to(path) == ["Bearer access-1", "Bearer access-2"]
    pair = await client.credentials.load()
    assert (pair.access, pair.refresh) == ("access-2", "refresh-2")


@pytest.mark.asyncio
async def test_revoked_refresh_token_logs_everyone_out(client, api, dispatcher):
    # Arrange
    await login(client)
    api.expire_access_token()
    api.revoked = True

    # Act
    results = await asyncio.gather(
        client.users.get_my_profile(),
        client.board.get_posts(),
        return_exceptions=True,
    )

    # Assert
    assert api.refresh_requests == 1
    assert all(isinstance(r, SessionExpiredError) for r in results)
    assert get_error_message(results[0], "en") == "Please log in again."
    assert await client.is_authenticated() is False
    assert await client.users.get_cached_profile() is None
    assert [n.event for n in dispatcher.active.values()] == [SESSION_EXPIRED_EVENT]
    assert api.calls_to("/api/users/me") == ["Bearer access-1"]


@pytest.mark.asyncio
async def test_rejected_replay_surfaces_forbidden(client, api):
    # Arrange
    await login(client)
    api.reject_all = True

    # Act
    with pytest.raises(ForbiddenError) as exc_info:
        await client.users.get_my_profile()

    # Assert
    assert exc_info.value.code == "reauthentication_rejected"
    assert api.refresh_requests == 1
    assert api.calls_to("/api/users/me") == ["Bearer access-1", "Bearer access-2"]
    assert await client.is_authenticated() is True


@pytest.mark.asyncio
async def test_refresh_token_rotated_elsewhere_expires_session(client, api):
    # Arrange
    await login(client)
    # Another device refreshed; this client still holds generation 1.
    api.generation = 5

    # Act
    with pytest.raises(SessionExpiredError):
        await client.users.get_my_profile()

    # Assert
    assert api.refresh_requests == 1


@pytest.mark.asyncio
async def test_not_found_is_not_a_session_problem(client, api):
    # Arrange
    await login(client)

    # Act
    with pytest.raises(NotFoundError):
        await client.board.get_post(404)

    # Assert
    assert api.refresh_requests == 0
    assert await client.is_authenticated() is True
