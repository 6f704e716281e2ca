from unittest.mock import AsyncMock

import pytest

from safezone.domain.models.location import Coordinate, LocationBounds, NearbyParams
from safezone.domain.services.location_service import LocationService

CCTV = {"id": 1, "district": "Jongno-gu", "address": "1 Sejong-daero", "latitude": 37.57, "longitude": 126.97, "cctvCount": 3}
LIGHT = {"id": "L-1", "managementNumber": "0001", "latitude": 37.571, "longitude": 126.971}
CRIME = {"id": 9, "district": "Jongno-gu", "latitude": 37.572, "longitude": 126.972, "crimeType": "theft"}


@pytest.fixture
def coordinator():
    return AsyncMock()


@pytest.fixture
def service(coordinator):
    return LocationService(coordinator)


def sent_request(coordinator):
    return coordinator.execute.await_args.args[0]


@pytest.mark.asyncio
async def test_nearby_cctv_uses_default_radius(service, coordinator):
    # Arrange
    coordinator.execute.return_value = [CCTV]

    # Act
    result = await service.get_nearby_cctv(NearbyParams(latitude=37.57, longitude=126.97))

    # Assert
    request = sent_request(coordinator)
    assert request.endpoint == "/locations/cctv/nearby"
    assert dict(request.params) == {"latitude": 37.57, "longitude": 126.97, "radius": 1000}
    assert result[0].cctv_count == 3


@pytest.mark.asyncio
async def test_nearby_lights_with_explicit_radius(service, coordinator):
    # Arrange
    coordinator.execute.return_value = [LIGHT]

    # Act
    result = await service.get_nearby_lights(NearbyParams(latitude=37.57, longitude=126.97, radius=300))

    # Assert
    assert dict(sent_request(coordinator).params)["radius"] == 300
    assert result[0].management_number == "0001"


@pytest.mark.asyncio
async def test_bounds_queries_send_camel_case_bounds(service, coordinator):
    # Arrange
    coordinator.execute.return_value = [CRIME]
    bounds = LocationBounds(min_lat=37.5, max_lat=37.6, min_lng=126.9, max_lng=127.0)

    # Act
    result = await service.get_crime_data_in_bounds(bounds)

    # Assert
    request = sent_request(coordinator)
    assert request.endpoint == "/locations/crime/bounds"
    assert dict(request.params) == {"minLat": 37.5, "maxLat": 37.6, "minLng": 126.9, "maxLng": 127.0}
    assert result[0].crime_type == "theft"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, argument, endpoint, params",
    [
        ("get_cctv_by_district", "Jongno-gu", "/locations/cctv/district", {"name": "Jongno-gu"}),
        ("get_crime_data_by_type", "theft", "/locations/crime/type", {"type": "theft"}),
    ],
)
async def test_lookup_by_name(service, coordinator, method, argument, endpoint, params):
    # Arrange
    coordinator.execute.return_value = []

    # Act
    result = await getattr(service, method)(argument)

    # Assert
    assert result == []
    assert sent_request(coordinator).endpoint == endpoint
    assert dict(sent_request(coordinator).params) == params


@pytest.mark.asyncio
async def test_empty_response_is_empty_list(service, coordinator):
    # Arrange
    coordinator.execute.return_value = None

    # Act & Assert
    bounds = LocationBounds(min_lat=0, max_lat=1, min_lng=0, max_lng=1)
    assert await service.get_lights_in_bounds(bounds) == []
    assert await service.get_cctv_in_bounds(bounds) == []


@pytest.mark.asyncio
async def test_safety_score_defaults_to_smaller_radius(service, coordinator):
    # Arrange
    coordinator.execute.return_value = {"score": 82.5, "cctvCount": 4, "lightCount": 10, "crimeCount": 1, "level": "safe"}

    # Act
    score = await service.get_safety_score(NearbyParams(latitude=37.57, longitude=126.97))

    # Assert
    assert dict(sent_request(coordinator).params)["radius"] == 500
    assert score.level == "safe"
    assert score.light_count == 10


@pytest.mark.asyncio
async def test_all_nearby_facilities(service, coordinator):
    # Arrange
    coordinator.execute.return_value = {"cctv": [CCTV], "lights": [LIGHT], "crimeData": [CRIME]}

    # Act
    facilities = await service.get_all_nearby_facilities(NearbyParams(latitude=37.57, longitude=126.97))

    # Assert
    assert sent_request(coordinator).endpoint == "/locations/all-facilities"
    assert len(facilities.cctv) == len(facilities.lights) == len(facilities.crime_data) == 1


@pytest.mark.asyncio
async def test_safe_route_posts_coordinates(service, coordinator):
    # Arrange
    coordinator.execute.return_value = {"path": []}

    # Act
    await service.get_safe_route(Coordinate(lat=37.5, lng=127.0), Coordinate(lat=37.6, lng=127.1))

    # Assert
    request = sent_request(coordinator)
    assert (request.method, request.endpoint) == ("POST", "/locations/safe-route")
    assert request.body == {
        "start": {"latitude": 37.5, "longitude": 127.0},
        "end": {"latitude": 37.6, "longitude": 127.1},
    }
