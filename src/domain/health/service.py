import logging
from src.infrastructure.config.settings import Settings
from src.infrastructure.database.client import DatabaseClient

logger = logging.getLogger(__name__)


class HealthService:
    def __init__(self, db_client: DatabaseClient, config: Settings):
        self.db_client = db_client
        self.config = config

    async def report(self) -> dict:
        try:
            record_store = await self.db_client.health_check()
        except Exception as e:
            logger.error(f"Record store unreachable: {e}")
            record_store = False

        return {
            "status": "healthy" if record_store else "unhealthy",
            "record_store": record_store,
            "app": self.config.app_name,
            "version": self.config.app_version,
            "environment": self.config.environment.value,
        }
