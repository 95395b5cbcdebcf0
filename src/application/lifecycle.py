from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from src.application.container import container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = container.config()
    db_client = container.db_client()

    logger.info(f"Starting {config.app_name} ({config.environment.value})...")
    logger.info(
        f"Analytics: default range={config.analytics_default_range.value} "
        f"rolling window={config.analytics_rolling_window} "
        f"timezone={config.analytics_timezone or 'host local'}"
    )

    try:
        await db_client.init()
        logger.info("Record store initialized")
        yield

    except Exception as e:
        logger.error(f"Error during startup: {str(e)}")
        raise

    finally:
        logger.info("Shutting down application...")
        await db_client.close()
        logger.info("Application shut down successfully")
