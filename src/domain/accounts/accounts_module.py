from dependency_injector import containers, providers
from .accounts_service import AccountsService


class AccountsModule(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=[".controller"])
    root = providers.DependenciesContainer()

    accounts_service = providers.Factory(
        AccountsService,
        db_client=root.db_client,
    )
