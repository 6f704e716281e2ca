"""HTTP request executor for the SafeZone API.

Performs one call with `httpx.AsyncClient` and turns the outcome into either
a decoded body or a structured error. It attaches bearer credentials but does
not react to 401; credential refresh is layered on top by the coordinator.
"""

import json
from typing import Any, Dict, Optional

import httpx
import structlog

from safezone.core.config.settings import Settings, settings as default_settings
from safezone.core.exceptions import NetworkError, UnknownApiError, error_for_status
from safezone.domain.interfaces.credential_store import ICredentialStore
from safezone.domain.interfaces.request_executor import IRequestExecutor
from safezone.domain.value_objects.api_request import AUTHORIZATION_HEADER, ApiRequest
from safezone.utils.i18n import get_translated_message

logger = structlog.get_logger(__name__)


class RequestExecutor(IRequestExecutor):
    """Executes requests against ``API_BASE_URL + API_PREFIX``.

    Args:
        credential_store: Source of the current access credential.
        settings: Client settings; the module-level settings by default.
        client: Optional preconfigured `httpx.AsyncClient` (tests pass one with
            a mock transport). A client built here is closed by `close()`.
    """

    def __init__(
        self,
        credential_store: ICredentialStore,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings or default_settings
        self._credential_store = credential_store
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self._settings.API_BASE_URL,
            timeout=self._settings.REQUEST_TIMEOUT_SECONDS,
        )

    def url_for(self, endpoint: str) -> str:
        return f"{self._settings.API_PREFIX}{endpoint}"

    async def execute(self, request: ApiRequest, access_token: Optional[str] = None) -> Any:
        headers = await self._build_headers(request, access_token)
        url = self.url_for(request.endpoint)

        logger.debug("api_request_sent", method=request.method, url=url)
        try:
            response = await self._client.request(
                request.method,
                url,
                headers=headers,
                params=dict(request.params) or None,
                json=request.body,
            )
        except httpx.TransportError as e:
            logger.warning(
                "api_network_error",
                method=request.method,
                url=url,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise NetworkError() from e

        return self._handle_response(request, response)

    async def _build_headers(self, request: ApiRequest, access_token: Optional[str]) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        headers.update(request.headers)

        if request.uses_stored_credential:
            token = access_token
            if token is None:
                pair = await self._credential_store.load()
                token = pair.access if pair else None
            if token:
                headers[AUTHORIZATION_HEADER] = f"Bearer {token}"
        return headers

    def _handle_response(self, request: ApiRequest, response: httpx.Response) -> Any:
        status = response.status_code

        if status == 204:
            logger.debug("api_response_received", endpoint=request.endpoint, status=status)
            return None

        if response.is_success:
            logger.debug("api_response_received", endpoint=request.endpoint, status=status)
            if not response.content:
                return None
            try:
                return response.json()
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.error("api_response_undecodable", endpoint=request.endpoint, status=status)
                raise UnknownApiError(get_translated_message("invalid_response_body"), status_code=status) from e

        message = self._extract_message(response)
        logger.warning("api_error_response", method=request.method, endpoint=request.endpoint, status=status)
        raise error_for_status(status, message)

    @staticmethod
    def _extract_message(response: httpx.Response) -> Optional[str]:
        if not response.content:
            return None
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
        if isinstance(data, dict):
            message = data.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return None

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
