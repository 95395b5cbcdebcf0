import logging
from typing import Optional

from src.commons.exceptions import AccountNotFoundError
from src.domain.calculator.dtos.position_size_dto import (
    PositionSizeRequest,
    PositionSizeResult,
)
from src.domain.calculator.position_sizing import calculate_position_size
from src.infrastructure.database.client import DatabaseClient
from src.infrastructure.database.repositories.account_repository import AccountRepository

logger = logging.getLogger(__name__)


class CalculatorService:
    def __init__(self, db_client: DatabaseClient):
        self.db_client = db_client

    async def position_size(
        self,
        user_id: str,
        request: PositionSizeRequest,
    ) -> Optional[PositionSizeResult]:
        """
        Position size for the request. Without an explicit principal the
        initial balance of ``request.account_id`` is used.
        """
        if request.principal is None and request.account_id:
            async with self.db_client.get_session() as session:
                account = await AccountRepository(session).get(user_id, request.account_id)
            if account is None:
                raise AccountNotFoundError(request.account_id)
            request = request.model_copy(update={"principal": account.initial_balance})

        result = calculate_position_size(request)
        if result is None:
            logger.info(f"Position size not computable for {request.model_dump()}")
        return result
