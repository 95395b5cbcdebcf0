import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.strategies.dtos.strategy_dto import StrategyDTO
from src.infrastructure.database.models.strategy_model import StrategyModel

logger = logging.getLogger(__name__)


class StrategyRepository:
    """Owner-scoped persistence for strategies."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # ==========================
    #        QUERIES
    # ==========================

    async def list_for_user(
        self,
        user_id: str,
        account_id: Optional[str] = None,
    ) -> List[StrategyDTO]:
        """Strategies of a user, newest first, optionally for one account."""
        stmt = select(StrategyModel).where(StrategyModel.user_id == user_id)
        if account_id is not None:
            stmt = stmt.where(StrategyModel.account_id == account_id)
        stmt = stmt.order_by(StrategyModel.created_at.desc())

        result = await self.session.execute(stmt)
        return [StrategyDTO.model_validate(m) for m in result.scalars().all()]

    async def get(self, user_id: str, strategy_id: str) -> Optional[StrategyDTO]:
        model = await self._get_model(user_id, strategy_id)
        return StrategyDTO.model_validate(model) if model else None

    # ==========================
    #        COMMANDS
    # ==========================

    async def add(self, user_id: str, values: Dict[str, Any]) -> StrategyDTO:
        model = StrategyModel(user_id=user_id, **values)
        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)
        return StrategyDTO.model_validate(model)

    async def update(self, user_id: str, strategy_id: str, values: Dict[str, Any]) -> Optional[StrategyDTO]:
        model = await self._get_model(user_id, strategy_id)
        if model is None:
            return None

        for column, value in values.items():
            setattr(model, column, value)

        await self.session.commit()
        await self.session.refresh(model)
        return StrategyDTO.model_validate(model)

    async def delete(self, user_id: str, strategy_id: str) -> bool:
        result = await self.session.execute(
            delete(StrategyModel).where(
                StrategyModel.user_id == user_id,
                StrategyModel.id == strategy_id,
            )
        )
        await self.session.commit()
        return result.rowcount > 0

    async def _get_model(self, user_id: str, strategy_id: str) -> Optional[StrategyModel]:
        stmt = select(StrategyModel).where(
            StrategyModel.user_id == user_id,
            StrategyModel.id == strategy_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
