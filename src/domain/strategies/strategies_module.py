from dependency_injector import containers, providers
from .strategies_service import StrategiesService


class StrategiesModule(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=[".controller"])
    root = providers.DependenciesContainer()

    strategies_service = providers.Factory(
        StrategiesService,
        db_client=root.db_client,
    )
