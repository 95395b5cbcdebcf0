import logging
from typing import List, Optional

from src.commons.exceptions import AccountNotFoundError, StrategyNotFoundError
from src.domain.strategies.dtos.strategy_dto import (
    StrategyCreateDTO,
    StrategyDTO,
    StrategyUpdateDTO,
)
from src.infrastructure.database.client import DatabaseClient
from src.infrastructure.database.repositories.account_repository import AccountRepository
from src.infrastructure.database.repositories.strategy_repository import StrategyRepository

logger = logging.getLogger(__name__)


class StrategiesService:
    def __init__(self, db_client: DatabaseClient):
        self.db_client = db_client

    async def list_strategies(
        self,
        user_id: str,
        account_id: Optional[str] = None,
    ) -> List[StrategyDTO]:
        async with self.db_client.get_session() as session:
            return await StrategyRepository(session).list_for_user(user_id, account_id=account_id)

    async def get_strategy(self, user_id: str, strategy_id: str) -> StrategyDTO:
        async with self.db_client.get_session() as session:
            strategy = await StrategyRepository(session).get(user_id, strategy_id)
        if strategy is None:
            raise StrategyNotFoundError(strategy_id)
        return strategy

    async def create_strategy(self, user_id: str, payload: StrategyCreateDTO) -> StrategyDTO:
        try:
            async with self.db_client.get_session() as session:
                account = await AccountRepository(session).get(user_id, payload.account_id)
                if account is None:
                    raise AccountNotFoundError(payload.account_id)
                saved = await StrategyRepository(session).add(user_id, payload.model_dump())

            logger.info(f"Strategy created: {saved.title} on account {saved.account_id}")
            return saved

        except AccountNotFoundError:
            logger.warning(f"Create strategy rejected, unknown account {payload.account_id}")
            raise
        except Exception as e:
            logger.error(f"Error creating strategy for user {user_id}: {e}")
            raise

    async def update_strategy(
        self,
        user_id: str,
        strategy_id: str,
        payload: StrategyUpdateDTO,
    ) -> StrategyDTO:
        changes = payload.model_dump(exclude_unset=True)

        try:
            async with self.db_client.get_session() as session:
                if "account_id" in changes:
                    account = await AccountRepository(session).get(user_id, changes["account_id"])
                    if account is None:
                        raise AccountNotFoundError(changes["account_id"])

                updated = await StrategyRepository(session).update(user_id, strategy_id, changes)

            if updated is None:
                raise StrategyNotFoundError(strategy_id)

            logger.info(f"Strategy {strategy_id} updated: {sorted(changes)}")
            return updated

        except (StrategyNotFoundError, AccountNotFoundError) as e:
            logger.warning(f"Update rejected: {e}")
            raise
        except Exception as e:
            logger.error(f"Error updating strategy {strategy_id}: {e}")
            raise

    async def delete_strategy(self, user_id: str, strategy_id: str) -> None:
        async with self.db_client.get_session() as session:
            deleted = await StrategyRepository(session).delete(user_id, strategy_id)
        if not deleted:
            raise StrategyNotFoundError(strategy_id)
        logger.info(f"Strategy {strategy_id} deleted")
