"""Safe route recommendation service.

The backend ranks candidate walking paths by nearby CCTV, streetlights and
crime data; the client only forwards the query and shapes the answer.
"""

from typing import Optional

import structlog

from safezone.domain.models.route import Recommendation
from safezone.domain.services.refresh_coordinator import RefreshCoordinator
from safezone.domain.value_objects.api_request import ApiRequest

logger = structlog.get_logger(__name__)


class RouteService:
    def __init__(self, coordinator: RefreshCoordinator):
        self._coordinator = coordinator

    async def get_recommended_route(
        self,
        start_lat: float,
        start_lon: float,
        end_keyword: str,
        user_id: Optional[int] = None,
    ) -> Optional[Recommendation]:
        """Returns the recommendation, or None when the backend reports no route.

        Raises:
            ApiError, NetworkError: When the request itself fails.
        """
        params = {
            "startLat": start_lat,
            "startLon": start_lon,
            "endKeyword": end_keyword,
            "userId": user_id or None,
        }
        response = await self._coordinator.execute(ApiRequest("/path/recommend", params=params))

        if isinstance(response, dict) and response.get("success"):
            return Recommendation.model_validate(response.get("data"))

        logger.info(
            "route_recommendation_unavailable",
            error=response.get("error") if isinstance(response, dict) else None,
        )
        return None
