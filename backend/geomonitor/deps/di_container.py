"""
Dependency injection container using dependency-injector.
Holds process-wide collaborators built once at startup.
"""

from dependency_injector import containers, providers

from geomonitor.core.permissions import PermissionChecker
from geomonitor.services.health_service import HealthService
from geomonitor.controllers.health_controller import HealthController


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Configuration
    config = providers.Configuration()

    # Read-only permission policy shared by all requests
    permission_checker = providers.Singleton(
        PermissionChecker,
    )

    # Services
    health_service = providers.Singleton(
        HealthService,
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


# Global container instance
_container: Container = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def get_permission_checker() -> PermissionChecker:
    """FastAPI dependency returning the process-wide permission checker."""
    return get_container().permission_checker()
