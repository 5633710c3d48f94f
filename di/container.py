from __future__ import annotations

from dependency_injector import containers, providers

from core.settings import SETTINGS
from infra.resources import DatabaseResource, Lifecycle


class InfrastructureContainer(containers.DeclarativeContainer):
    settings = providers.Object(SETTINGS)

    # Database
    database = providers.Resource(
        DatabaseResource,
        database_url=SETTINGS.DATABASE.DATABASE_URL,
        pool_size=SETTINGS.DATABASE.POOL_SIZE,
        max_overflow=SETTINGS.DATABASE.MAX_OVERFLOW,
    )

    # Readiness flag shared by the health endpoint and the server launcher
    lifecycle = providers.Singleton(Lifecycle)


class ServiceContainer(containers.DeclarativeContainer):
    """Application services - depends on infrastructure."""

    infrastructure = providers.DependenciesContainer()

    message_service = providers.Factory(
        "api.features.messages.service.MessageService",
    )


class ControllerContainer(containers.DeclarativeContainer):
    """Controller-specific dependencies."""

    services = providers.DependenciesContainer()

    message_controller = providers.Factory(
        "api.features.messages.controller.MessageController",
        message_service=services.message_service,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Main application container composing all sub-containers."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "api.main",
            "api.shared.db",
            "api.features.messages.router",
            "api.features.health.router",
        ]
    )

    infrastructure = providers.Container(InfrastructureContainer)
    services = providers.Container(ServiceContainer, infrastructure=infrastructure)
    controllers = providers.Container(ControllerContainer, services=services)
