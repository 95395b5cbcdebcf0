import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

from src.commons.enums.trade_enums import DateRangePresetEnum, TradeStatusEnum
from src.commons.exceptions import AccountNotFoundError
from src.domain.analytics.analytics_service import AnalyticsService
from src.domain.analytics.dtos.trade_stats import TradeMetricsRequest
from src.domain.accounts.dtos.account_dto import AccountDTO
from src.domain.trades.dtos.trade_dto import TradeDTO

SERVICE = "src.domain.analytics.analytics_service"


@pytest.fixture
def mock_db_client():
    client = MagicMock()
    session = AsyncMock()
    client.get_session.return_value.__aenter__.return_value = session
    client.get_session.return_value.__aexit__.return_value = None
    return client


@pytest.fixture
def mock_config():
    config = MagicMock()
    config.local_timezone = timezone.utc
    config.analytics_rolling_window = 2
    config.analytics_leaderboard_limit = 10
    config.analytics_default_range = DateRangePresetEnum.ALL
    config.analytics_default_initial_balance = 10000.0
    return config


@pytest.fixture
def analytics_service(mock_db_client, mock_config):
    return AnalyticsService(db_client=mock_db_client, config=mock_config)


def create_trade(pl, days_ago, strategy=None, status=TradeStatusEnum.CLOSED) -> TradeDTO:
    exit_ts = datetime.now(timezone.utc) - timedelta(days=days_ago)
    return TradeDTO(
        id=f"t-{days_ago}",
        user_id="user-1",
        account_id="acc-1",
        symbol="AAPL",
        quantity=1.0,
        entry_price=100.0,
        exit_price=100.0 + pl,
        entry_timestamp=exit_ts - timedelta(hours=1),
        exit_timestamp=exit_ts,
        profit_loss=pl,
        strategy=strategy,
        status=status,
    )


def create_account(account_id, balance) -> AccountDTO:
    return AccountDTO(id=account_id, user_id="user-1", name=account_id, initial_balance=balance)


def mock_repositories(account_repo_cls, trade_repo_cls, accounts, trades):
    """Wire patched repository classes to return fixed records."""
    account_repo = account_repo_cls.return_value
    account_repo.list_for_user = AsyncMock(return_value=accounts)
    account_repo.get = AsyncMock(
        side_effect=lambda user_id, account_id: next(
            (a for a in accounts if a.id == account_id), None
        )
    )
    trade_repo_cls.return_value.list_for_user = AsyncMock(return_value=trades)


# ==================== DASHBOARD ====================


@pytest.mark.asyncio
async def test_dashboard_over_all_trades(analytics_service):
    trades = [
        create_trade(100.0, days_ago=400, strategy="Breakout"),
        create_trade(-50.0, days_ago=3, strategy="Breakout"),
        create_trade(20.0, days_ago=1, status=TradeStatusEnum.OPEN),
    ]

    with patch(f"{SERVICE}.AccountRepository") as account_repo_cls, \
            patch(f"{SERVICE}.TradeRepository") as trade_repo_cls:
        mock_repositories(
            account_repo_cls,
            trade_repo_cls,
            [create_account("acc-1", 1000.0), create_account("acc-2", 500.0)],
            trades,
        )

        dashboard = await analytics_service.build_dashboard("user-1", range_name="all")

    assert dashboard.range_name == "all"
    assert dashboard.window.start is None
    assert dashboard.initial_balance == 1500.0
    assert dashboard.stats.total_trades == 3
    assert dashboard.stats.closed_trades == 2
    assert dashboard.stats.profit_factor == 2.0
    assert [p.balance for p in dashboard.equity_curve] == [1500.0, 1600.0, 1550.0]
    assert len(dashboard.rolling_win_rate) == 1
    assert dashboard.rolling_window == 2
    assert len(dashboard.pl_by_day_of_week) == 7
    assert dashboard.strategy_leaderboard[0].name == "Breakout"
    trade_repo_cls.return_value.list_for_user.assert_awaited_once_with("user-1", account_id=None)


@pytest.mark.asyncio
async def test_dashboard_uses_default_balance_without_accounts(analytics_service):
    with patch(f"{SERVICE}.AccountRepository") as account_repo_cls, \
            patch(f"{SERVICE}.TradeRepository") as trade_repo_cls:
        mock_repositories(account_repo_cls, trade_repo_cls, [], [])

        dashboard = await analytics_service.build_dashboard("user-1")

    assert dashboard.initial_balance == 10000.0
    assert dashboard.range_name == DateRangePresetEnum.ALL.value
    assert dashboard.equity_curve == []
    assert dashboard.stats.total_trades == 0


@pytest.mark.asyncio
async def test_dashboard_preset_filters_window(analytics_service):
    trades = [create_trade(100.0, days_ago=400), create_trade(-50.0, days_ago=3)]

    with patch(f"{SERVICE}.AccountRepository") as account_repo_cls, \
            patch(f"{SERVICE}.TradeRepository") as trade_repo_cls:
        mock_repositories(account_repo_cls, trade_repo_cls, [create_account("acc-1", 1000.0)], trades)

        dashboard = await analytics_service.build_dashboard("user-1", range_name="last_week")

    assert dashboard.range_name == "last_week"
    assert dashboard.window.end - dashboard.window.start == timedelta(days=7)
    assert dashboard.stats.closed_trades == 1
    assert dashboard.stats.total_pl == -50.0


@pytest.mark.asyncio
async def test_dashboard_unknown_range_uses_last_month(analytics_service):
    trades = [create_trade(100.0, days_ago=400), create_trade(-50.0, days_ago=3)]

    with patch(f"{SERVICE}.AccountRepository") as account_repo_cls, \
            patch(f"{SERVICE}.TradeRepository") as trade_repo_cls:
        mock_repositories(account_repo_cls, trade_repo_cls, [], trades)

        dashboard = await analytics_service.build_dashboard("user-1", range_name="fortnight")

    assert dashboard.range_name == "last_month"
    assert dashboard.stats.closed_trades == 1


@pytest.mark.asyncio
async def test_dashboard_custom_range(analytics_service):
    trades = [create_trade(100.0, days_ago=400), create_trade(-50.0, days_ago=3)]
    now = datetime.now(timezone.utc)

    with patch(f"{SERVICE}.AccountRepository") as account_repo_cls, \
            patch(f"{SERVICE}.TradeRepository") as trade_repo_cls:
        mock_repositories(account_repo_cls, trade_repo_cls, [], trades)

        dashboard = await analytics_service.build_dashboard(
            "user-1",
            range_name="custom",
            start=now - timedelta(days=500),
            end=now - timedelta(days=300),
        )
        partial = await analytics_service.build_dashboard(
            "user-1",
            range_name="custom",
            start=now - timedelta(days=500),
        )

    assert dashboard.stats.total_pl == 100.0
    assert partial.stats.closed_trades == 2


@pytest.mark.asyncio
async def test_dashboard_scoped_to_account(analytics_service):
    with patch(f"{SERVICE}.AccountRepository") as account_repo_cls, \
            patch(f"{SERVICE}.TradeRepository") as trade_repo_cls:
        mock_repositories(
            account_repo_cls,
            trade_repo_cls,
            [create_account("acc-1", 1000.0), create_account("acc-2", 500.0)],
            [create_trade(10.0, days_ago=1)],
        )

        dashboard = await analytics_service.build_dashboard("user-1", account_id="acc-2")

    assert dashboard.initial_balance == 500.0
    account_repo_cls.return_value.list_for_user.assert_not_called()
    trade_repo_cls.return_value.list_for_user.assert_awaited_once_with("user-1", account_id="acc-2")


@pytest.mark.asyncio
async def test_dashboard_unknown_account_raises(analytics_service):
    with patch(f"{SERVICE}.AccountRepository") as account_repo_cls, \
            patch(f"{SERVICE}.TradeRepository") as trade_repo_cls:
        mock_repositories(account_repo_cls, trade_repo_cls, [], [])

        with pytest.raises(AccountNotFoundError):
            await analytics_service.build_dashboard("user-1", account_id="missing")

    trade_repo_cls.return_value.list_for_user.assert_not_called()


@pytest.mark.asyncio
async def test_dashboard_propagates_store_errors(analytics_service):
    with patch(f"{SERVICE}.AccountRepository") as account_repo_cls, \
            patch(f"{SERVICE}.TradeRepository"):
        account_repo_cls.return_value.list_for_user = AsyncMock(side_effect=RuntimeError("db down"))

        with pytest.raises(RuntimeError, match="db down"):
            await analytics_service.build_dashboard("user-1")


# ==================== STATS / PREVIEW ====================


@pytest.mark.asyncio
async def test_get_stats_returns_display_values(analytics_service):
    trades = [
        create_trade(10.0, days_ago=3),
        create_trade(10.0, days_ago=2),
        create_trade(-10.0, days_ago=1),
    ]

    with patch(f"{SERVICE}.AccountRepository") as account_repo_cls, \
            patch(f"{SERVICE}.TradeRepository") as trade_repo_cls:
        mock_repositories(account_repo_cls, trade_repo_cls, [], trades)

        stats = await analytics_service.get_stats("user-1", range_name="all")

    assert stats.win_rate == 66.67
    assert stats.total_pl == 10.0


def test_preview_trade_metrics(analytics_service):
    request = TradeMetricsRequest(direction="short", entry_price=50.0, exit_price=45.0, quantity=4)

    metrics = analytics_service.preview_trade_metrics(request)

    assert metrics.profit_loss == 20.0
    assert metrics.profit_loss_percent == 10.0


def test_preview_trade_metrics_incomplete_form(analytics_service):
    metrics = analytics_service.preview_trade_metrics(TradeMetricsRequest(entry_price=50.0))

    assert metrics.profit_loss is None
    assert metrics.profit_loss_percent is None


@pytest.mark.asyncio
async def test_get_stats_propagates_store_errors(analytics_service):
    with patch(f"{SERVICE}.AccountRepository") as account_repo_cls, \
            patch(f"{SERVICE}.TradeRepository"):
        account_repo_cls.return_value.list_for_user = AsyncMock(side_effect=RuntimeError("db down"))

        with pytest.raises(RuntimeError, match="db down"):
            await analytics_service.get_stats("user-1")


@pytest.mark.asyncio
async def test_get_stats_logs_store_errors(analytics_service, caplog):
    with patch(f"{SERVICE}.AccountRepository") as account_repo_cls, \
            patch(f"{SERVICE}.TradeRepository"):
        account_repo_cls.return_value.list_for_user = AsyncMock(side_effect=RuntimeError("db down"))

        with caplog.at_level("ERROR", logger=SERVICE), pytest.raises(RuntimeError):
            await analytics_service.get_stats("user-1")

    assert "Error computing stats for user user-1: db down" in caplog.text


@pytest.mark.asyncio
async def test_get_stats_unknown_account(analytics_service):
    with patch(f"{SERVICE}.AccountRepository") as account_repo_cls, \
            patch(f"{SERVICE}.TradeRepository") as trade_repo_cls:
        mock_repositories(account_repo_cls, trade_repo_cls, [], [])

        with pytest.raises(AccountNotFoundError):
            await analytics_service.get_stats("user-1", account_id="missing")
