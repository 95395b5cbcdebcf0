from dependency_injector import containers, providers
from .calculator_service import CalculatorService


class CalculatorModule(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=[".controller"])
    root = providers.DependenciesContainer()

    calculator_service = providers.Factory(
        CalculatorService,
        db_client=root.db_client,
    )
