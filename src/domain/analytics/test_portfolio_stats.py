import math
from datetime import datetime, timedelta, timezone

import pytest

from src.commons.enums.trade_enums import TradeDirectionEnum, TradeStatusEnum
from src.domain.analytics.dtos.trade_stats import TradeStats
from src.domain.analytics.portfolio_stats import compute_portfolio_stats, resolve_profit_loss
from src.domain.trades.dtos.trade_dto import TradeDTO

BASE = datetime(2024, 3, 4, 15, 0, tzinfo=timezone.utc)


def create_trade(pl=None, day=0, status=TradeStatusEnum.CLOSED, **overrides) -> TradeDTO:
    """Helper for a trade closing ``day`` days after BASE."""
    exit_ts = BASE + timedelta(days=day)
    fields = dict(
        symbol="AAPL",
        quantity=1.0,
        entry_price=100.0,
        exit_price=110.0,
        entry_timestamp=exit_ts - timedelta(hours=2),
        exit_timestamp=exit_ts,
        profit_loss=pl,
        status=status,
    )
    fields.update(overrides)
    return TradeDTO(**fields)


# ==================== EMPTY / DEGENERATE ====================


def test_empty_collection_gives_all_zero_stats():
    stats = compute_portfolio_stats([])

    assert stats == TradeStats()
    assert stats.profit_factor == 0.0
    assert stats.max_drawdown == 0.0


def test_only_open_trades():
    stats = compute_portfolio_stats([
        create_trade(status=TradeStatusEnum.OPEN, exit_price=None, exit_timestamp=None),
    ])

    assert stats.total_trades == 1
    assert stats.open_trades == 1
    assert stats.closed_trades == 0
    assert stats.win_rate == 0.0
    assert stats.open_pl == 0.0


def test_closed_trade_without_exit_data_is_excluded():
    """No stored P/L and no exit price: counted in total only."""
    trades = [
        create_trade(100.0),
        create_trade(None, day=1, exit_price=None, exit_timestamp=None),
    ]

    stats = compute_portfolio_stats(trades)

    assert stats.total_trades == 2
    assert stats.closed_trades == 1
    assert stats.total_pl == 100.0


# ==================== WIN / LOSS AGGREGATES ====================


def test_profit_factor_and_expectancy():
    """+100 / -50 → profit factor 2, win rate 50%, expectancy 25."""
    stats = compute_portfolio_stats([create_trade(100.0), create_trade(-50.0, day=1)])

    assert stats.closed_trades == 2
    assert stats.winning_trades == 1
    assert stats.losing_trades == 1
    assert stats.win_rate == 50.0
    assert stats.total_pl == 50.0
    assert stats.total_profit == 100.0
    assert stats.total_loss == 50.0
    assert stats.avg_win == 100.0
    assert stats.avg_loss == 50.0
    assert stats.profit_factor == 2.0
    assert stats.expectancy == pytest.approx(25.0)


def test_profit_factor_unbounded_without_losses():
    stats = compute_portfolio_stats([create_trade(100.0), create_trade(20.0, day=1)])

    assert math.isinf(stats.profit_factor)
    assert stats.to_display().profit_factor is None


def test_break_even_trade_is_neither_win_nor_loss():
    stats = compute_portfolio_stats([create_trade(0.0), create_trade(30.0, day=1)])

    assert stats.closed_trades == 2
    assert stats.winning_trades == 1
    assert stats.losing_trades == 0
    assert stats.win_rate == 50.0
    assert stats.profit_factor == float("inf")


def test_avg_r_treats_missing_as_zero():
    trades = [
        create_trade(100.0, r_multiple=2.0),
        create_trade(-50.0, day=1, r_multiple=-1.0),
        create_trade(10.0, day=2),
    ]

    assert compute_portfolio_stats(trades).avg_r == pytest.approx(1 / 3)


def test_missing_pl_is_recomputed():
    """Closed trade with exit data but no cached P/L still counts."""
    trade = create_trade(None, quantity=2.0, exit_price=105.0)

    stats = compute_portfolio_stats([trade])

    assert stats.closed_trades == 1
    assert stats.total_pl == 10.0
    assert trade.profit_loss is None


def test_non_finite_stored_pl_is_recomputed():
    trade = {
        "status": "closed",
        "direction": "long",
        "entry_price": 10.0,
        "exit_price": 12.0,
        "quantity": 5,
        "profit_loss": float("nan"),
        "exit_timestamp": BASE,
    }

    assert resolve_profit_loss(trade) == 10.0
    assert compute_portfolio_stats([trade]).total_pl == 10.0


# ==================== DRAWDOWN ====================


def test_max_drawdown_is_largest_peak_to_trough():
    """1000 → 1100 → 950 → 990: peak 1100, trough 950."""
    trades = [create_trade(100.0), create_trade(-150.0, day=1), create_trade(40.0, day=2)]

    stats = compute_portfolio_stats(trades, initial_balance=1000.0)

    assert stats.max_drawdown == 150.0
    assert stats.max_drawdown_percent == pytest.approx(150 / 1100 * 100)


def test_drawdown_walks_chronologically_not_input_order():
    trades = [create_trade(40.0, day=2), create_trade(-150.0, day=1), create_trade(100.0)]

    assert compute_portfolio_stats(trades, initial_balance=1000.0).max_drawdown == 150.0


def test_drawdown_from_initial_balance():
    stats = compute_portfolio_stats([create_trade(-200.0)], initial_balance=1000.0)

    assert stats.max_drawdown == 200.0
    assert stats.max_drawdown_percent == 20.0


def test_drawdown_percent_with_zero_peak():
    stats = compute_portfolio_stats([create_trade(-200.0)], initial_balance=0.0)

    assert stats.max_drawdown == 200.0
    assert stats.max_drawdown_percent == 0.0


def test_stats_do_not_depend_on_order():
    trades = [
        create_trade(100.0),
        create_trade(-150.0, day=1),
        create_trade(40.0, day=2),
        create_trade(-5.0, day=3),
    ]

    forward = compute_portfolio_stats(trades, initial_balance=500.0)
    backward = compute_portfolio_stats(list(reversed(trades)), initial_balance=500.0)

    assert forward == backward


# ==================== DAYS / OPEN P/L ====================


def test_best_and_worst_day_sum_per_utc_date():
    trades = [
        create_trade(100.0),
        create_trade(-30.0),
        create_trade(-150.0, day=1),
        create_trade(20.0, day=3),
    ]

    stats = compute_portfolio_stats(trades)

    assert stats.best_day == 70.0
    assert stats.worst_day == -150.0


def test_best_day_uses_utc_date_of_exit():
    """Both exits fall on 2024-03-04 in UTC despite different offsets."""
    plus_five = timezone(timedelta(hours=5))
    trades = [
        create_trade(50.0, exit_timestamp=datetime(2024, 3, 4, 1, 0, tzinfo=timezone.utc)),
        create_trade(25.0, exit_timestamp=datetime(2024, 3, 5, 3, 0, tzinfo=plus_five)),
    ]

    stats = compute_portfolio_stats(trades)

    assert stats.best_day == 75.0
    assert stats.worst_day == 75.0


def test_open_pl_marks_open_trades_to_exit_price():
    trades = [
        create_trade(status=TradeStatusEnum.OPEN, exit_price=120.0, exit_timestamp=None),
        create_trade(
            status=TradeStatusEnum.OPEN,
            direction=TradeDirectionEnum.SHORT,
            exit_price=90.0,
            exit_timestamp=None,
        ),
        create_trade(status=TradeStatusEnum.OPEN, exit_price=None, exit_timestamp=None),
        create_trade(5.0),
    ]

    stats = compute_portfolio_stats(trades)

    assert stats.open_trades == 3
    assert stats.open_pl == 30.0
    assert stats.total_pl == 5.0


def test_accepts_plain_mappings():
    trades = [
        {"status": "closed", "profit_loss": 25.0, "exit_timestamp": BASE},
        {"status": "CLOSED", "profit_loss": -5.0, "exit_timestamp": BASE.isoformat()},
        {"status": "open"},
    ]

    stats = compute_portfolio_stats(trades)

    assert stats.closed_trades == 2
    assert stats.open_trades == 1
    assert stats.total_pl == 20.0


def test_display_rounds_values():
    stats = compute_portfolio_stats(
        [create_trade(10.0), create_trade(10.0, day=1), create_trade(-10.0, day=2)]
    )

    display = stats.to_display()

    assert display.win_rate == 66.67
    assert display.closed_trades == 3
    assert display.profit_factor == 2.0


def test_display_can_be_redisplayed():
    display = compute_portfolio_stats([create_trade(100.0)]).to_display()

    assert display.profit_factor is None
    assert display.to_display() == display
