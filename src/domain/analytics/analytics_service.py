import logging
from datetime import datetime
from typing import List, Optional, Tuple

from src.commons.enums.trade_enums import DateRangePresetEnum
from src.commons.exceptions import AccountNotFoundError
from src.domain.analytics import projections
from src.domain.analytics.date_ranges import filter_trades_by_date_range, get_date_range_preset
from src.domain.analytics.dtos.dashboard_dto import DashboardDTO, DateRange
from src.domain.analytics.dtos.trade_stats import (
    TradeMetricsDTO,
    TradeMetricsRequest,
    TradeStatsDisplay,
)
from src.domain.analytics.portfolio_stats import compute_portfolio_stats
from src.domain.analytics.trade_metrics import compute_trade_metrics
from src.domain.trades.dtos.trade_dto import TradeDTO
from src.infrastructure.config.settings import Settings
from src.infrastructure.database.client import DatabaseClient
from src.infrastructure.database.repositories.account_repository import AccountRepository
from src.infrastructure.database.repositories.trade_repository import TradeRepository

logger = logging.getLogger(__name__)

_PRESETS = {p.value for p in DateRangePresetEnum}


class AnalyticsService:
    """
    Loads a user's trades and accounts from the record store and runs the
    analytics core over them. Holds no state between calls.
    """

    def __init__(self, db_client: DatabaseClient, config: Settings):
        self.db_client = db_client
        self.config = config

    async def build_dashboard(
        self,
        user_id: str,
        account_id: Optional[str] = None,
        range_name: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> DashboardDTO:
        try:
            trades, initial_balance = await self._load(user_id, account_id)
            name, window, selected = self._select_window(trades, range_name, start, end)

            stats = compute_portfolio_stats(selected, initial_balance)
            tz = self.config.local_timezone
            rolling_window = self.config.analytics_rolling_window
            limit = self.config.analytics_leaderboard_limit

            dashboard = DashboardDTO(
                range_name=name,
                window=window,
                initial_balance=initial_balance,
                stats=stats.to_display(),
                equity_curve=projections.equity_curve(selected, initial_balance),
                drawdown_curve=projections.drawdown_curve(selected, initial_balance),
                rolling_win_rate=projections.rolling_win_rate(selected, rolling_window),
                rolling_window=rolling_window,
                pl_distribution=projections.pl_distribution(selected),
                pl_by_day_of_week=projections.pl_by_day_of_week(selected, tz),
                heatmap=projections.pl_heatmap(selected, tz),
                strategy_leaderboard=projections.strategy_leaderboard(selected, limit),
                symbol_leaderboard=projections.symbol_leaderboard(selected, limit),
            )

            logger.info(
                f"Dashboard built for user {user_id}: range={name} "
                f"trades={len(selected)}/{len(trades)} closed={stats.closed_trades}"
            )
            return dashboard

        except AccountNotFoundError:
            logger.warning(f"Dashboard requested for unknown account {account_id}")
            raise
        except Exception as e:
            logger.error(f"Error building dashboard for user {user_id}: {e}")
            raise

    async def get_stats(
        self,
        user_id: str,
        account_id: Optional[str] = None,
        range_name: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> TradeStatsDisplay:
        try:
            trades, initial_balance = await self._load(user_id, account_id)
            _, _, selected = self._select_window(trades, range_name, start, end)
            return compute_portfolio_stats(selected, initial_balance).to_display()

        except AccountNotFoundError:
            logger.warning(f"Stats requested for unknown account {account_id}")
            raise
        except Exception as e:
            logger.error(f"Error computing stats for user {user_id}: {e}")
            raise

    def preview_trade_metrics(self, request: TradeMetricsRequest) -> TradeMetricsDTO:
        return compute_trade_metrics(request)

    async def _load(
        self,
        user_id: str,
        account_id: Optional[str],
    ) -> Tuple[List[TradeDTO], float]:
        async with self.db_client.get_session() as session:
            account_repo = AccountRepository(session)
            if account_id is not None:
                account = await account_repo.get(user_id, account_id)
                if account is None:
                    raise AccountNotFoundError(account_id)
                accounts = [account]
            else:
                accounts = await account_repo.list_for_user(user_id)

            trades = await TradeRepository(session).list_for_user(user_id, account_id=account_id)

        if accounts:
            initial_balance = sum(a.initial_balance for a in accounts)
        else:
            initial_balance = self.config.analytics_default_initial_balance
        return trades, initial_balance

    def _select_window(
        self,
        trades: List[TradeDTO],
        range_name: Optional[str],
        start: Optional[datetime],
        end: Optional[datetime],
    ) -> Tuple[str, DateRange, List[TradeDTO]]:
        name = (range_name or self.config.analytics_default_range.value).lower()

        if name == DateRangePresetEnum.ALL.value:
            return name, DateRange(), trades

        if name == DateRangePresetEnum.CUSTOM.value:
            if start is None or end is None:
                return name, DateRange(start=start, end=end), trades
            window = DateRange(start=start, end=end)
        else:
            if name not in _PRESETS:
                logger.warning(f"Unknown date range '{name}', using last_month")
                name = DateRangePresetEnum.LAST_MONTH.value
            window = get_date_range_preset(name, tz=self.config.local_timezone)

        return name, window, filter_trades_by_date_range(trades, window.start, window.end)
