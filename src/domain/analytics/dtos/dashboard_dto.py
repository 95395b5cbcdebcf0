from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.domain.analytics.dtos.chart_dtos import (
    DayOfWeekBucket,
    DistributionBin,
    DrawdownPoint,
    EquityPoint,
    Heatmap,
    LeaderboardEntry,
    RollingWinRatePoint,
)
from src.domain.analytics.dtos.trade_stats import TradeStatsDisplay


class DateRange(BaseModel):
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class DashboardDTO(BaseModel):
    """Everything the dashboard renders for one user and window."""

    range_name: str
    window: DateRange
    initial_balance: float
    stats: TradeStatsDisplay

    equity_curve: List[EquityPoint] = Field(default_factory=list)
    drawdown_curve: List[DrawdownPoint] = Field(default_factory=list)
    rolling_win_rate: List[RollingWinRatePoint] = Field(default_factory=list)
    rolling_window: int
    pl_distribution: List[DistributionBin] = Field(default_factory=list)
    pl_by_day_of_week: List[DayOfWeekBucket] = Field(default_factory=list)
    heatmap: Heatmap
    strategy_leaderboard: List[LeaderboardEntry] = Field(default_factory=list)
    symbol_leaderboard: List[LeaderboardEntry] = Field(default_factory=list)
