"""Keyword place search through the Kakao Local API.

Used to turn a destination typed by the user into coordinates before asking
for a safe route. This is a third-party API with its own key, so it does not
go through the SafeZone request pipeline.
"""

from typing import List, Optional

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from safezone.core.config.settings import Settings, settings as default_settings
from safezone.core.exceptions import NetworkError, UnknownApiError, error_for_status
from safezone.domain.models.route import SearchedPlace
from safezone.utils.i18n import get_translated_message

logger = structlog.get_logger(__name__)

KEYWORD_SEARCH_PATH = "/v2/local/search/keyword.json"


class PlaceSearchClient:
    """Searches places by keyword.

    Transient transport errors are retried with exponential backoff; once the
    attempts are exhausted a `NetworkError` is raised. HTTP errors are not
    retried and map to the usual API errors.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None):
        self._settings = settings or default_settings
        self._headers = {"Authorization": f"KakaoAK {self._settings.KAKAO_REST_API_KEY.get_secret_value()}"}
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self._settings.KAKAO_API_BASE_URL,
            timeout=self._settings.REQUEST_TIMEOUT_SECONDS,
        )

    async def search_places_by_keyword(self, keyword: str) -> List[SearchedPlace]:
        """Returns up to PLACE_SEARCH_PAGE_SIZE places matching the keyword.

        A blank keyword returns an empty list without calling the API.
        """
        if not keyword or not keyword.strip():
            return []

        params = {"query": keyword.strip(), "size": self._settings.PLACE_SEARCH_PAGE_SIZE}
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._settings.PLACE_SEARCH_MAX_ATTEMPTS),
                wait=wait_exponential(multiplier=0.5, max=4),
                retry=retry_if_exception_type(httpx.TransportError),
            ):
                with attempt:
                    response = await self._client.get(KEYWORD_SEARCH_PATH, params=params, headers=self._headers)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            logger.warning("place_search_unavailable", error=str(last_error))
            raise NetworkError(get_translated_message("place_search_unavailable")) from last_error

        if not response.is_success:
            logger.warning("place_search_failed", status=response.status_code)
            raise error_for_status(response.status_code, self._error_message(response))

        try:
            data = response.json()
        except ValueError as e:
            logger.error("place_search_response_undecodable", status=response.status_code)
            raise UnknownApiError(get_translated_message("invalid_response_body"), status_code=response.status_code) from e
        if not isinstance(data, dict):
            logger.error("place_search_response_unexpected", status=response.status_code)
            raise UnknownApiError(get_translated_message("invalid_response_body"), status_code=response.status_code)

        documents = data.get("documents") or []
        return [SearchedPlace.model_validate(doc) for doc in documents]

    @staticmethod
    def _error_message(response: httpx.Response) -> Optional[str]:
        try:
            data = response.json()
        except ValueError:
            return None
        return data.get("message") if isinstance(data, dict) else None

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
