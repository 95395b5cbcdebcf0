import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.accounts.dtos.account_dto import AccountDTO
from src.infrastructure.database.models.account_model import AccountModel

logger = logging.getLogger(__name__)


class AccountRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # ==========================
    #        QUERIES
    # ==========================

    async def list_for_user(self, user_id: str) -> List[AccountDTO]:
        """Accounts of a user, newest first."""
        stmt = (
            select(AccountModel)
            .where(AccountModel.user_id == user_id)
            .order_by(AccountModel.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [AccountDTO.model_validate(m) for m in result.scalars().all()]

    async def get(self, user_id: str, account_id: str) -> Optional[AccountDTO]:
        model = await self._get_model(user_id, account_id)
        if not model:
            return None
        return AccountDTO.model_validate(model)

    # ==========================
    #        COMMANDS
    # ==========================

    async def add(self, user_id: str, values: Dict[str, Any]) -> AccountDTO:
        model = AccountModel(user_id=user_id, **values)
        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)
        return AccountDTO.model_validate(model)

    async def update(self, user_id: str, account_id: str, values: Dict[str, Any]) -> Optional[AccountDTO]:
        model = await self._get_model(user_id, account_id)
        if model is None:
            return None

        for column, value in values.items():
            setattr(model, column, value)

        await self.session.commit()
        await self.session.refresh(model)
        return AccountDTO.model_validate(model)

    async def delete(self, user_id: str, account_id: str) -> bool:
        """Removes the account; its trades and strategies go with it (ON DELETE CASCADE)."""
        result = await self.session.execute(
            delete(AccountModel).where(
                AccountModel.user_id == user_id,
                AccountModel.id == account_id,
            )
        )
        await self.session.commit()
        return result.rowcount > 0

    async def _get_model(self, user_id: str, account_id: str) -> Optional[AccountModel]:
        stmt = select(AccountModel).where(
            AccountModel.user_id == user_id,
            AccountModel.id == account_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
