import logging
from typing import List

from src.commons.exceptions import AccountNotFoundError
from src.domain.accounts.dtos.account_dto import AccountCreateDTO, AccountDTO, AccountUpdateDTO
from src.infrastructure.database.client import DatabaseClient
from src.infrastructure.database.repositories.account_repository import AccountRepository

logger = logging.getLogger(__name__)


class AccountsService:
    def __init__(self, db_client: DatabaseClient):
        self.db_client = db_client

    async def list_accounts(self, user_id: str) -> List[AccountDTO]:
        async with self.db_client.get_session() as session:
            return await AccountRepository(session).list_for_user(user_id)

    async def get_account(self, user_id: str, account_id: str) -> AccountDTO:
        async with self.db_client.get_session() as session:
            account = await AccountRepository(session).get(user_id, account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def create_account(self, user_id: str, payload: AccountCreateDTO) -> AccountDTO:
        try:
            values = payload.model_dump()
            values["currency"] = values["currency"].upper()

            async with self.db_client.get_session() as session:
                saved = await AccountRepository(session).add(user_id, values)

            logger.info(f"Account created: {saved.id} {saved.name} ({saved.currency})")
            return saved

        except Exception as e:
            logger.error(f"Error creating account for user {user_id}: {e}")
            raise

    async def update_account(
        self,
        user_id: str,
        account_id: str,
        payload: AccountUpdateDTO,
    ) -> AccountDTO:
        changes = payload.model_dump(exclude_unset=True)
        if "currency" in changes:
            changes["currency"] = changes["currency"].upper()

        try:
            async with self.db_client.get_session() as session:
                updated = await AccountRepository(session).update(user_id, account_id, changes)

            if updated is None:
                raise AccountNotFoundError(account_id)

            logger.info(f"Account {account_id} updated: {sorted(changes)}")
            return updated

        except AccountNotFoundError as e:
            logger.warning(f"Update rejected: {e}")
            raise
        except Exception as e:
            logger.error(f"Error updating account {account_id}: {e}")
            raise

    async def delete_account(self, user_id: str, account_id: str) -> None:
        async with self.db_client.get_session() as session:
            deleted = await AccountRepository(session).delete(user_id, account_id)
        if not deleted:
            raise AccountNotFoundError(account_id)
        logger.info(f"Account {account_id} deleted with its trades and strategies")
