from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class EquityPoint(BaseModel):
    label: str
    balance: float
    timestamp: Optional[datetime] = None


class DrawdownPoint(BaseModel):
    index: int
    timestamp: Optional[datetime] = None
    balance: float
    peak: float
    drawdown: float
    drawdown_percent: float


class RollingWinRatePoint(BaseModel):
    index: int
    timestamp: Optional[datetime] = None
    win_rate: float


class DistributionBin(BaseModel):
    index: int
    start: float
    end: float
    count: int


class DayOfWeekBucket(BaseModel):
    day: int = Field(..., ge=0, le=6)   # 0 = Sunday
    name: str
    total_pl: float = 0.0
    trade_count: int = 0
    win_count: int = 0


class LeaderboardEntry(BaseModel):
    name: str
    total_pl: float
    count: int
    win_rate: float
    avg_pl: float


class Heatmap(BaseModel):
    """Summed P/L per (day of week, hour) cell, rows indexed Sunday first."""
    cells: List[List[float]]
