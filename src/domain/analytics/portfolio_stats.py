import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from src.domain.analytics.dtos.trade_stats import TradeStats
from src.domain.analytics.helpers import (
    chronological_key,
    field_value,
    finite_or_none,
    is_closed,
    is_open,
    resolved_timestamp,
    stored_profit_loss,
    utc_day,
)
from src.domain.analytics.trade_metrics import compute_trade_metrics

logger = logging.getLogger(__name__)


def resolve_profit_loss(trade: Any) -> Optional[float]:
    """Cached P/L when present, otherwise recomputed without touching the trade."""
    cached = stored_profit_loss(trade)
    if cached is not None:
        return cached
    return compute_trade_metrics(trade).profit_loss


def compute_portfolio_stats(
    trades: Iterable[Any],
    initial_balance: float = 10_000.0,
) -> TradeStats:
    """
    Aggregate a trade collection into portfolio statistics.

    Closed trades whose P/L cannot be resolved are left out of every
    figure except ``total_trades``. Drawdown is the largest peak-to-trough
    gap of the running balance; best and worst day bucket P/L by UTC date.
    """
    trades = list(trades)
    balance = finite_or_none(initial_balance) or 0.0

    closed: List[Tuple[Any, float]] = []
    open_trades: List[Any] = []
    unresolved = 0

    for trade in trades:
        if is_closed(trade):
            pl = resolve_profit_loss(trade)
            if pl is None:
                unresolved += 1
                continue
            closed.append((trade, pl))
        elif is_open(trade):
            open_trades.append(trade)

    if unresolved:
        logger.debug(f"Skipped {unresolved} closed trades without computable P/L")

    pls = [pl for _, pl in closed]
    wins = [pl for pl in pls if pl > 0]
    losses = [pl for pl in pls if pl < 0]

    total_pl = sum(pls)
    total_profit = sum(wins)
    total_loss = abs(sum(losses))

    avg_win = total_profit / len(wins) if wins else 0.0
    avg_loss = total_loss / len(losses) if losses else 0.0
    win_rate = len(wins) / len(closed) * 100 if closed else 0.0

    expectancy = (
        (win_rate / 100) * avg_win - ((100 - win_rate) / 100) * avg_loss
        if closed else 0.0
    )

    if total_loss > 0:
        profit_factor = total_profit / total_loss
    else:
        profit_factor = float("inf") if total_profit > 0 else 0.0

    avg_r = (
        sum(finite_or_none(field_value(t, "r_multiple")) or 0.0 for t, _ in closed) / len(closed)
        if closed else 0.0
    )

    # running balance walk, oldest first
    running = balance
    peak = balance
    max_drawdown = 0.0
    max_drawdown_percent = 0.0
    daily_pl: Dict[Optional[str], float] = {}

    for trade, pl in sorted(closed, key=lambda item: chronological_key(item[0])):
        running += pl
        if running > peak:
            peak = running

        drawdown = peak - running
        if drawdown > max_drawdown:
            max_drawdown = drawdown
            max_drawdown_percent = (drawdown / peak) * 100 if peak != 0 else 0.0

        day = utc_day(resolved_timestamp(trade))
        daily_pl[day] = daily_pl.get(day, 0.0) + pl

    best_day = max(daily_pl.values()) if daily_pl else 0.0
    worst_day = min(daily_pl.values()) if daily_pl else 0.0

    # mark-to-exit for open trades that already carry an exit price
    open_pl = 0.0
    for trade in open_trades:
        if not finite_or_none(field_value(trade, "exit_price")):
            continue
        open_pl += compute_trade_metrics(trade).profit_loss or 0.0

    return TradeStats(
        total_trades=len(trades),
        open_trades=len(open_trades),
        closed_trades=len(closed),
        winning_trades=len(wins),
        losing_trades=len(losses),
        win_rate=win_rate,
        total_pl=total_pl,
        total_profit=total_profit,
        total_loss=total_loss,
        avg_win=avg_win,
        avg_loss=avg_loss,
        avg_r=avg_r,
        expectancy=expectancy,
        profit_factor=profit_factor,
        max_drawdown=max_drawdown,
        max_drawdown_percent=max_drawdown_percent,
        best_day=best_day,
        worst_day=worst_day,
        open_pl=open_pl,
    )
