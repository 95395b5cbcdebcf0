from dependency_injector import containers, providers
from src.infrastructure.database.client import DatabaseClient
from src.infrastructure.config.settings import Settings


class Container(containers.DeclarativeContainer):
    config = providers.Singleton(Settings)

    db_client = providers.Singleton(
        DatabaseClient,
        db_url=config().async_database_url,
        pool_size=config().db_pool_size,
        max_overflow=config().db_max_overflow,
        pool_timeout=config().db_pool_timeout,
        pool_recycle=config().db_pool_recycle,
        echo=config().db_echo,
        create_schema=config().db_create_schema,
    )


container = Container()
