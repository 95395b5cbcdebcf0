import logging
from datetime import date, datetime, time, tzinfo
from typing import Any, Dict, List, Optional

import pandas as pd

from src.commons.exceptions import AccountNotFoundError, TradeNotFoundError
from src.domain.analytics.dtos.trade_stats import TradeMetricsDTO
from src.domain.analytics.helpers import finite_or_none, is_closed, to_aware
from src.domain.analytics.trade_metrics import compute_trade_metrics
from src.domain.trades.dtos.trade_dto import (
    METRIC_INPUT_FIELDS,
    TradeCreateDTO,
    TradeDTO,
    TradeFilterDTO,
    TradeUpdateDTO,
)
from src.infrastructure.config.settings import Settings
from src.infrastructure.database.client import DatabaseClient
from src.infrastructure.database.repositories.account_repository import AccountRepository
from src.infrastructure.database.repositories.trade_repository import TradeRepository

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "symbol",
    "direction",
    "status",
    "entry_timestamp",
    "exit_timestamp",
    "entry_price",
    "exit_price",
    "quantity",
    "leverage",
    "fees",
    "commission",
    "slippage",
    "profit_loss",
    "profit_loss_percent",
    "strategy",
    "tags",
]


def metrics_for_storage(trade: Any) -> TradeMetricsDTO:
    """Metrics cached on the record: only closed trades with an exit price get values."""
    if is_closed(trade) and finite_or_none(getattr(trade, "exit_price", None)):
        return compute_trade_metrics(trade)
    return TradeMetricsDTO()


def _day_bound(day: date, at: time, tz: Optional[tzinfo]) -> datetime:
    if tz is not None:
        return datetime.combine(day, at, tzinfo=tz)
    return datetime.combine(day, at).astimezone()


def apply_filters(
    trades: List[TradeDTO],
    filters: TradeFilterDTO,
    tz: Optional[tzinfo] = None,
) -> List[TradeDTO]:
    """
    Trade-list filtering. The date window applies to the entry timestamp,
    from the start of ``from_date`` to the end of ``to_date``.
    """
    search = (filters.search or "").lower()
    start = _day_bound(filters.from_date, time.min, tz) if filters.from_date else None
    end = _day_bound(filters.to_date, time.max, tz) if filters.to_date else None

    selected = []
    for trade in trades:
        if search and search not in trade.symbol.lower():
            continue
        if filters.account_id and trade.account_id != filters.account_id:
            continue
        if filters.status and trade.status != filters.status:
            continue
        if filters.direction and trade.direction != filters.direction:
            continue
        if filters.strategy and trade.strategy != filters.strategy:
            continue

        pl = trade.profit_loss or 0.0
        if filters.min_pl is not None and pl < filters.min_pl:
            continue
        if filters.max_pl is not None and pl > filters.max_pl:
            continue

        if start or end:
            entry = to_aware(trade.entry_timestamp)
            if entry is None:
                continue
            if start and entry < start:
                continue
            if end and entry > end:
                continue

        selected.append(trade)
    return selected


class TradesService:
    def __init__(self, db_client: DatabaseClient, config: Settings):
        self.db_client = db_client
        self.config = config

    async def list_trades(
        self,
        user_id: str,
        filters: Optional[TradeFilterDTO] = None,
    ) -> List[TradeDTO]:
        filters = filters or TradeFilterDTO()
        async with self.db_client.get_session() as session:
            trades = await TradeRepository(session).list_for_user(
                user_id, account_id=filters.account_id
            )
        return apply_filters(trades, filters, tz=self.config.local_timezone)

    async def get_trade(self, user_id: str, trade_id: str) -> TradeDTO:
        async with self.db_client.get_session() as session:
            trade = await TradeRepository(session).get(user_id, trade_id)
        if trade is None:
            raise TradeNotFoundError(trade_id)
        return trade

    async def create_trade(self, user_id: str, payload: TradeCreateDTO) -> TradeDTO:
        try:
            trade = TradeDTO(user_id=user_id, **payload.model_dump())
            metrics = metrics_for_storage(trade)
            trade = trade.model_copy(update=metrics.model_dump())

            async with self.db_client.get_session() as session:
                account = await AccountRepository(session).get(user_id, payload.account_id)
                if account is None:
                    raise AccountNotFoundError(payload.account_id)
                saved = await TradeRepository(session).add(trade)

            logger.info(
                f"Trade created: {saved.symbol} {saved.direction.value} "
                f"status={saved.status.value} pl={saved.profit_loss}"
            )
            return saved

        except AccountNotFoundError:
            logger.warning(f"Create trade rejected, unknown account {payload.account_id}")
            raise
        except Exception as e:
            logger.error(f"Error creating trade for user {user_id}: {e}")
            raise

    async def update_trade(
        self,
        user_id: str,
        trade_id: str,
        payload: TradeUpdateDTO,
    ) -> TradeDTO:
        changes: Dict[str, Any] = payload.model_dump(exclude_unset=True)

        try:
            async with self.db_client.get_session() as session:
                trade_repo = TradeRepository(session)
                current = await trade_repo.get(user_id, trade_id)
                if current is None:
                    raise TradeNotFoundError(trade_id)

                if changes.get("account_id"):
                    account = await AccountRepository(session).get(user_id, changes["account_id"])
                    if account is None:
                        raise AccountNotFoundError(changes["account_id"])

                if any(name in changes for name in METRIC_INPUT_FIELDS):
                    merged = current.model_copy(update=changes)
                    changes.update(metrics_for_storage(merged).model_dump())

                updated = await trade_repo.update(user_id, trade_id, changes)

            if updated is None:
                raise TradeNotFoundError(trade_id)

            logger.info(f"Trade {trade_id} updated: {sorted(changes)}")
            return updated

        except (TradeNotFoundError, AccountNotFoundError) as e:
            logger.warning(f"Update rejected: {e}")
            raise
        except Exception as e:
            logger.error(f"Error updating trade {trade_id}: {e}")
            raise

    async def delete_trade(self, user_id: str, trade_id: str) -> None:
        async with self.db_client.get_session() as session:
            deleted = await TradeRepository(session).delete(user_id, trade_id)
        if not deleted:
            raise TradeNotFoundError(trade_id)
        logger.info(f"Trade {trade_id} deleted")

    async def delete_all_trades(self, user_id: str) -> int:
        async with self.db_client.get_session() as session:
            return await TradeRepository(session).delete_all_for_user(user_id)

    async def export_csv(
        self,
        user_id: str,
        filters: Optional[TradeFilterDTO] = None,
    ) -> str:
        trades = await self.list_trades(user_id, filters)
        rows = []
        for trade in trades:
            row = trade.model_dump(mode="json", include=set(EXPORT_COLUMNS))
            row["tags"] = ";".join(trade.tags)
            rows.append(row)

        df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
        return df.to_csv(index=False)
