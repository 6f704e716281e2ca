"""Location data service: CCTV, streetlights, crime data and safe routes.

Every lookup is a read-only query; the spatial work happens on the backend.
"""

from typing import Any, List, Type, TypeVar

from pydantic import BaseModel

from safezone.domain.models.location import (
    DEFAULT_RADIUS_METERS,
    DEFAULT_SAFETY_RADIUS_METERS,
    CCTVData,
    Coordinate,
    CrimeData,
    LightData,
    LocationBounds,
    NearbyFacilities,
    NearbyParams,
    SafetyScore,
)
from safezone.domain.services.refresh_coordinator import RefreshCoordinator
from safezone.domain.value_objects.api_request import ApiRequest

M = TypeVar("M", bound=BaseModel)


def _nearby_query(params: NearbyParams, default_radius: int = DEFAULT_RADIUS_METERS) -> dict:
    return {
        "latitude": params.latitude,
        "longitude": params.longitude,
        "radius": params.radius or default_radius,
    }


class LocationService:
    def __init__(self, coordinator: RefreshCoordinator):
        self._coordinator = coordinator

    async def _get_list(self, endpoint: str, model: Type[M], query: dict) -> List[M]:
        response = await self._coordinator.execute(ApiRequest(endpoint, params=query))
        return [model.model_validate(item) for item in response or []]

    # CCTV

    async def get_nearby_cctv(self, params: NearbyParams) -> List[CCTVData]:
        return await self._get_list("/locations/cctv/nearby", CCTVData, _nearby_query(params))

    async def get_cctv_in_bounds(self, bounds: LocationBounds) -> List[CCTVData]:
        return await self._get_list("/locations/cctv/bounds", CCTVData, bounds.to_payload())

    async def get_cctv_by_district(self, district: str) -> List[CCTVData]:
        return await self._get_list("/locations/cctv/district", CCTVData, {"name": district})

    # Crime

    async def get_nearby_crime_data(self, params: NearbyParams) -> List[CrimeData]:
        return await self._get_list("/locations/crime/nearby", CrimeData, _nearby_query(params))

    async def get_crime_data_in_bounds(self, bounds: LocationBounds) -> List[CrimeData]:
        return await self._get_list("/locations/crime/bounds", CrimeData, bounds.to_payload())

    async def get_crime_data_by_type(self, crime_type: str) -> List[CrimeData]:
        return await self._get_list("/locations/crime/type", CrimeData, {"type": crime_type})

    # Streetlights

    async def get_nearby_lights(self, params: NearbyParams) -> List[LightData]:
        return await self._get_list("/locations/lights/nearby", LightData, _nearby_query(params))

    async def get_lights_in_bounds(self, bounds: LocationBounds) -> List[LightData]:
        return await self._get_list("/locations/lights/bounds", LightData, bounds.to_payload())

    # Aggregates

    async def get_safe_route(self, start: Coordinate, end: Coordinate) -> Any:
        """Asks the backend for the route with the most CCTV and streetlights."""
        body = {
            "start": {"latitude": start.lat, "longitude": start.lng},
            "end": {"latitude": end.lat, "longitude": end.lng},
        }
        return await self._coordinator.execute(ApiRequest("/locations/safe-route", method="POST", body=body))

    async def get_safety_score(self, params: NearbyParams) -> SafetyScore:
        response = await self._coordinator.execute(
            ApiRequest(
                "/locations/safety-score",
                params=_nearby_query(params, DEFAULT_SAFETY_RADIUS_METERS),
            )
        )
        return SafetyScore.model_validate(response)

    async def get_all_nearby_facilities(self, params: NearbyParams) -> NearbyFacilities:
        response = await self._coordinator.execute(
            ApiRequest("/locations/all-facilities", params=_nearby_query(params))
        )
        return NearbyFacilities.model_validate(response or {})
