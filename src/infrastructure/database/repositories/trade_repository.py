import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.trades.dtos.trade_dto import TradeDTO
from src.infrastructure.database.models.trade_model import TradeModel

logger = logging.getLogger(__name__)


class TradeRepository:
    """
    Owner-scoped persistence for trades.

    Every query filters on ``user_id``; a trade id belonging to someone else
    behaves exactly like a missing one.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # ==========================
    #        QUERIES
    # ==========================

    async def list_for_user(
        self,
        user_id: str,
        account_id: Optional[str] = None,
    ) -> List[TradeDTO]:
        """Trades of a user, newest entry first, optionally for one account."""
        stmt = select(TradeModel).where(TradeModel.user_id == user_id)
        if account_id is not None:
            stmt = stmt.where(TradeModel.account_id == account_id)
        stmt = stmt.order_by(TradeModel.entry_timestamp.desc())

        result = await self.session.execute(stmt)
        return [self._model_to_dto(m) for m in result.scalars().all()]

    async def get(self, user_id: str, trade_id: str) -> Optional[TradeDTO]:
        model = await self._get_model(user_id, trade_id)
        return self._model_to_dto(model) if model else None

    # ==========================
    #        COMMANDS
    # ==========================

    async def add(self, trade: TradeDTO) -> TradeDTO:
        model = TradeModel(**self._dto_to_columns(trade))
        if trade.id:
            model.id = trade.id

        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)
        return self._model_to_dto(model)

    async def update(self, user_id: str, trade_id: str, values: Dict[str, Any]) -> Optional[TradeDTO]:
        model = await self._get_model(user_id, trade_id)
        if model is None:
            return None

        for column, value in values.items():
            setattr(model, column, getattr(value, "value", value))

        await self.session.commit()
        await self.session.refresh(model)
        return self._model_to_dto(model)

    async def delete(self, user_id: str, trade_id: str) -> bool:
        result = await self.session.execute(
            delete(TradeModel).where(
                TradeModel.user_id == user_id,
                TradeModel.id == trade_id,
            )
        )
        await self.session.commit()
        return result.rowcount > 0

    async def delete_all_for_user(self, user_id: str) -> int:
        result = await self.session.execute(
            delete(TradeModel).where(TradeModel.user_id == user_id)
        )
        await self.session.commit()
        logger.info(f"Deleted {result.rowcount} trades for user {user_id}")
        return result.rowcount

    # ==========================
    #        MAPPING
    # ==========================

    async def _get_model(self, user_id: str, trade_id: str) -> Optional[TradeModel]:
        stmt = select(TradeModel).where(
            TradeModel.user_id == user_id,
            TradeModel.id == trade_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    def _dto_to_columns(self, trade: TradeDTO) -> Dict[str, Any]:
        columns = trade.model_dump(
            mode="python",
            exclude={"id", "created_at", "updated_at"},
        )
        return {k: getattr(v, "value", v) for k, v in columns.items()}

    def _model_to_dto(self, model: TradeModel) -> TradeDTO:
        return TradeDTO.model_validate(model)
