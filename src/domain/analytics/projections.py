"""
Chart projections over the closed-trade sequence.

Every function here works on closed trades that carry a stored P/L, sorted
oldest first by exit timestamp (entry timestamp when the trade has no exit).
With too few trades a projection returns an empty or all-zero result.
"""

import math
from typing import Any, Callable, Dict, Iterable, List, Optional
from datetime import tzinfo

from src.domain.analytics.dtos.chart_dtos import (
    DayOfWeekBucket,
    DistributionBin,
    DrawdownPoint,
    EquityPoint,
    Heatmap,
    LeaderboardEntry,
    RollingWinRatePoint,
)
from src.domain.analytics.helpers import (
    chart_trades,
    field_value,
    finite_or_none,
    js_weekday,
    local_datetime,
    resolved_timestamp,
    stored_profit_loss,
)

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
DISTRIBUTION_BINS = 10
DEFAULT_ROLLING_WINDOW = 20
DEFAULT_LEADERBOARD_LIMIT = 10
NO_STRATEGY = "No Strategy"


def equity_curve(trades: Iterable[Any], initial_balance: float) -> List[EquityPoint]:
    closed = chart_trades(trades)
    if not closed:
        return []

    balance = finite_or_none(initial_balance) or 0.0
    points = [EquityPoint(label="Start", balance=balance)]

    for i, trade in enumerate(closed):
        balance += stored_profit_loss(trade)
        points.append(
            EquityPoint(
                label="Now" if i == len(closed) - 1 else f"Trade {i + 1}",
                balance=balance,
                timestamp=resolved_timestamp(trade),
            )
        )
    return points


def drawdown_curve(trades: Iterable[Any], initial_balance: float) -> List[DrawdownPoint]:
    balance = finite_or_none(initial_balance) or 0.0
    peak = balance
    points: List[DrawdownPoint] = []

    for i, trade in enumerate(chart_trades(trades)):
        balance += stored_profit_loss(trade)
        if balance > peak:
            peak = balance
        drawdown = peak - balance
        points.append(
            DrawdownPoint(
                index=i,
                timestamp=resolved_timestamp(trade),
                balance=balance,
                peak=peak,
                drawdown=drawdown,
                drawdown_percent=(drawdown / peak) * 100 if peak != 0 else 0.0,
            )
        )
    return points


def rolling_win_rate(
    trades: Iterable[Any],
    window: int = DEFAULT_ROLLING_WINDOW,
) -> List[RollingWinRatePoint]:
    closed = chart_trades(trades)
    if window < 1 or len(closed) < window:
        return []

    won = [1 if stored_profit_loss(t) > 0 else 0 for t in closed]
    wins = sum(won[:window - 1])
    points: List[RollingWinRatePoint] = []

    for i in range(window - 1, len(closed)):
        wins += won[i]
        points.append(
            RollingWinRatePoint(
                index=i,
                timestamp=resolved_timestamp(closed[i]),
                win_rate=wins / window * 100,
            )
        )
        wins -= won[i - window + 1]
    return points


def pl_distribution(
    trades: Iterable[Any],
    bin_count: int = DISTRIBUTION_BINS,
) -> List[DistributionBin]:
    values = [stored_profit_loss(t) for t in chart_trades(trades)]
    if not values or bin_count < 1:
        return []

    low, high = min(values), max(values)
    width = (high - low) / bin_count
    if width == 0:
        width = 1.0

    counts = [0] * bin_count
    for value in values:
        position = (value - low) / width
        # clamp so the maximum lands in the last bin
        index = min(math.floor(position), bin_count - 1) if math.isfinite(position) else bin_count - 1
        counts[index] += 1

    return [
        DistributionBin(
            index=i,
            start=low + i * width,
            end=low + (i + 1) * width,
            count=count,
        )
        for i, count in enumerate(counts)
    ]


def pl_by_day_of_week(
    trades: Iterable[Any],
    tz: Optional[tzinfo] = None,
) -> List[DayOfWeekBucket]:
    buckets = [DayOfWeekBucket(day=i, name=name) for i, name in enumerate(DAY_NAMES)]

    for trade in chart_trades(trades):
        ts = resolved_timestamp(trade)
        if ts is None:
            continue
        pl = stored_profit_loss(trade)
        bucket = buckets[js_weekday(local_datetime(ts, tz))]
        bucket.total_pl += pl
        bucket.trade_count += 1
        if pl > 0:
            bucket.win_count += 1
    return buckets


def pl_heatmap(trades: Iterable[Any], tz: Optional[tzinfo] = None) -> Heatmap:
    cells = [[0.0] * 24 for _ in range(7)]

    for trade in chart_trades(trades):
        ts = resolved_timestamp(trade)
        if ts is None:
            continue
        moment = local_datetime(ts, tz)
        cells[js_weekday(moment)][moment.hour] += stored_profit_loss(trade)
    return Heatmap(cells=cells)


def leaderboard(
    trades: Iterable[Any],
    key: Callable[[Any], str],
    limit: Optional[int] = DEFAULT_LEADERBOARD_LIMIT,
) -> List[LeaderboardEntry]:
    """Group closed trades by ``key`` and rank groups by total P/L, best first."""
    groups: Dict[str, Dict[str, float]] = {}

    for trade in chart_trades(trades):
        pl = stored_profit_loss(trade)
        group = groups.setdefault(key(trade), {"total_pl": 0.0, "count": 0, "wins": 0})
        group["total_pl"] += pl
        group["count"] += 1
        if pl > 0:
            group["wins"] += 1

    entries = [
        LeaderboardEntry(
            name=name,
            total_pl=g["total_pl"],
            count=g["count"],
            win_rate=g["wins"] / g["count"] * 100,
            avg_pl=g["total_pl"] / g["count"],
        )
        for name, g in groups.items()
    ]
    entries.sort(key=lambda e: e.total_pl, reverse=True)
    return entries[:limit] if limit is not None else entries


def strategy_leaderboard(
    trades: Iterable[Any],
    limit: Optional[int] = DEFAULT_LEADERBOARD_LIMIT,
) -> List[LeaderboardEntry]:
    return leaderboard(
        trades,
        key=lambda t: field_value(t, "strategy") or NO_STRATEGY,
        limit=limit,
    )


def symbol_leaderboard(
    trades: Iterable[Any],
    limit: Optional[int] = DEFAULT_LEADERBOARD_LIMIT,
) -> List[LeaderboardEntry]:
    return leaderboard(
        trades,
        key=lambda t: str(field_value(t, "symbol") or ""),
        limit=limit,
    )
