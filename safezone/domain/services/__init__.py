from .auth_service import AuthService
from .board_service import BoardService
from .location_service import LocationService
from .refresh_coordinator import RefreshCoordinator, RefreshState
from .route_service import RouteService
from .user_service import UserService

__all__ = [
    "AuthService",
    "BoardService",
    "LocationService",
    "RefreshCoordinator",
    "RefreshState",
    "RouteService",
    "UserService",
]
