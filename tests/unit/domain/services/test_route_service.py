from unittest.mock import AsyncMock

import pytest

from safezone.domain.services.route_service import RouteService

PATH = {
    "id": 1,
    "summary": {"distance": 1200.0, "duration": 900.0},
    "coordinates": [[127.0, 37.5], [127.01, 37.51]],
    "score": 0.87,
}


@pytest.fixture
def coordinator():
    return AsyncMock()


@pytest.fixture
def service(coordinator):
    return RouteService(coordinator)


@pytest.mark.asyncio
async def test_recommended_route(service, coordinator):
    # Arrange
    coordinator.execute.return_value = {
        "success": True,
        "data": {
            "start": {"lat": 37.5, "lon": 127.0},
            "end": {"name": "Seoul Station", "lat": 37.55, "lon": 126.97},
            "bestPath": PATH,
            "allPaths": [PATH],
        },
    }

    # Act
    recommendation = await service.get_recommended_route(37.5, 127.0, "Seoul Station", user_id=7)

    # Assert
    request = coordinator.execute.await_args.args[0]
    assert request.endpoint == "/path/recommend"
    assert dict(request.params) == {"startLat": 37.5, "startLon": 127.0, "endKeyword": "Seoul Station", "userId": 7}
    assert recommendation.end.name == "Seoul Station"
    assert recommendation.best_path.coordinates[0] == (127.0, 37.5)


@pytest.mark.asyncio
async def test_anonymous_route_omits_user_id(service, coordinator):
    # Arrange
    coordinator.execute.return_value = {"success": False, "error": "no route"}

    # Act
    recommendation = await service.get_recommended_route(37.5, 127.0, "nowhere")

    # Assert
    assert recommendation is None
    assert "userId" not in coordinator.execute.await_args.args[0].params
