"""SafeZone asynchronous API client."""

from safezone.core.logging import configure_logging
from safezone.infrastructure.dependency_injection.client_dependencies import SafeZoneClient

__all__ = ["SafeZoneClient", "configure_logging"]
