import pytest
import pytest_asyncio

from safezone.core.config.settings import Settings
from safezone.infrastructure.credential_store import CredentialStore
from safezone.infrastructure.notifications.logging_dispatcher import LoggingNotificationDispatcher
from safezone.infrastructure.storage.memory import MemoryStorage
from safezone.utils.i18n import setup_i18n
from tests.utils.api_helpers import OLD_REFRESH, STALE_ACCESS


@pytest.fixture(scope="session", autouse=True)
def setup_i18n_for_tests():
    """Setup i18n system for all tests."""
    setup_i18n()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        API_BASE_URL="https://api.safezone.test",
        KAKAO_API_BASE_URL="https://kakao.test",
        STORAGE_BACKEND="memory",
        REFRESH_TIMEOUT_SECONDS=1.0,
        REQUEST_TIMEOUT_SECONDS=1.0,
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def credential_store(storage) -> CredentialStore:
    return CredentialStore(storage, key_prefix="@")


@pytest_asyncio.fixture
async def logged_in_store(credential_store) -> CredentialStore:
    """Credential store holding an access token the server no longer accepts."""
    await credential_store.save(STALE_ACCESS, OLD_REFRESH)
    return credential_store


@pytest.fixture
def dispatcher() -> LoggingNotificationDispatcher:
    return LoggingNotificationDispatcher()
