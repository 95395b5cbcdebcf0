from dependency_injector import containers, providers
from .analytics_service import AnalyticsService


class AnalyticsModule(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=[".controller"])
    root = providers.DependenciesContainer()

    analytics_service = providers.Factory(
        AnalyticsService,
        db_client=root.db_client,
        config=root.config,
    )
