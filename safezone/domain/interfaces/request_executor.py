"""Request executor interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from safezone.domain.value_objects.api_request import ApiRequest


class IRequestExecutor(ABC):
    """Performs exactly one HTTP call and classifies its outcome."""

    @abstractmethod
    async def execute(self, request: ApiRequest, access_token: Optional[str] = None) -> Any:
        """Issues the request.

        Args:
            request: The call to perform.
            access_token: Bearer credential to attach. When None, the
                credential currently held by the credential store is used.

        Returns:
            The decoded JSON body, or None for 204 and empty bodies.

        Raises:
            ApiError: For any non-2xx status, classified by status code.
            NetworkError: For transport failures.
        """
        raise NotImplementedError

    async def close(self) -> None:
        """Release transport resources."""
