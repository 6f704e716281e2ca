"""Client composition root.

Builds one storage backend, credential store, request executor, refresh
coordinator and one instance of every service from `Settings`. Each
`SafeZoneClient` owns its own refresh state, so independent clients (one per
test, one per account) never share a queue.
"""

from typing import Optional

import httpx
import structlog

from safezone.core.config.settings import Settings, settings as default_settings
from safezone.domain.interfaces.notifications import INotificationDispatcher
from safezone.domain.interfaces.storage import IKeyValueStorage
from safezone.domain.services.auth_service import AuthService
from safezone.domain.services.board_service import BoardService
from safezone.domain.services.location_service import LocationService
from safezone.domain.services.refresh_coordinator import RefreshCoordinator
from safezone.domain.services.route_service import RouteService
from safezone.domain.services.user_service import UserService
from safezone.infrastructure.credential_store import CredentialStore
from safezone.infrastructure.http.request_executor import RequestExecutor
from safezone.infrastructure.notifications.logging_dispatcher import LoggingNotificationDispatcher
from safezone.infrastructure.services.place_search import PlaceSearchClient
from safezone.infrastructure.storage.encrypted import EncryptedStorage
from safezone.infrastructure.storage.file import FileStorage
from safezone.infrastructure.storage.memory import MemoryStorage
from safezone.infrastructure.storage.redis import RedisStorage

logger = structlog.get_logger(__name__)


def create_storage(settings: Settings) -> IKeyValueStorage:
    """Builds the key/value backend selected by STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND == "file":
        storage: IKeyValueStorage = FileStorage(settings.STORAGE_FILE_PATH)
    elif settings.STORAGE_BACKEND == "redis":
        storage = RedisStorage.from_url(settings.REDIS_URL)
    else:
        storage = MemoryStorage()

    key = settings.CREDENTIAL_ENCRYPTION_KEY.get_secret_value()
    if key:
        storage = EncryptedStorage(storage, key.encode())
    logger.debug("credential_storage_created", backend=settings.STORAGE_BACKEND, encrypted=bool(key))
    return storage


class SafeZoneClient:
    """Entry point of the library.

    Usage:
        async with SafeZoneClient() as client:
            await client.auth.login(LoginRequest(email=..., password=...))
            page = await client.board.get_posts()

    Args:
        settings: Client settings; the module-level settings by default.
        storage: Key/value backend; built from settings when omitted.
        notification_dispatcher: Receives user-facing signals.
        http_client: Preconfigured client for the SafeZone API.
        place_search_http_client: Preconfigured client for the Kakao API.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        storage: Optional[IKeyValueStorage] = None,
        notification_dispatcher: Optional[INotificationDispatcher] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        place_search_http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or default_settings
        self.storage = storage or create_storage(self.settings)
        self.notifications = notification_dispatcher or LoggingNotificationDispatcher()

        self.credentials = CredentialStore(self.storage, key_prefix=self.settings.STORAGE_KEY_PREFIX)
        self.executor = RequestExecutor(self.credentials, settings=self.settings, client=http_client)
        self.coordinator = RefreshCoordinator(
            self.executor,
            self.credentials,
            notification_dispatcher=self.notifications,
            refresh_endpoint=self.settings.REFRESH_ENDPOINT,
            refresh_timeout=self.settings.REFRESH_TIMEOUT_SECONDS,
        )

        self.auth = AuthService(self.coordinator, self.credentials)
        self.users = UserService(self.coordinator, self.credentials)
        self.board = BoardService(self.coordinator)
        self.locations = LocationService(self.coordinator)
        self.routes = RouteService(self.coordinator)
        self.places = PlaceSearchClient(settings=self.settings, client=place_search_http_client)

    async def is_authenticated(self) -> bool:
        return await self.credentials.load() is not None

    async def aclose(self) -> None:
        await self.executor.close()
        await self.places.close()
        await self.storage.close()

    async def __aenter__(self) -> "SafeZoneClient":
        return self

    async def __aexit__(self, exc_type, exc_val, traceback) -> None:
        await self.aclose()
