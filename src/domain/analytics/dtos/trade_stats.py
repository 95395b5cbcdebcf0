import math
from typing import Optional

from pydantic import BaseModel

from src.domain.analytics.helpers import round2


class TradeMetricsDTO(BaseModel):
    """Per-trade derived values; both None when not computable."""
    profit_loss: Optional[float] = None
    profit_loss_percent: Optional[float] = None


class TradeStats(BaseModel):
    """Portfolio-level statistics over a trade collection."""

    total_trades: int = 0
    open_trades: int = 0
    closed_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0

    win_rate: float = 0.0
    total_pl: float = 0.0
    total_profit: float = 0.0
    total_loss: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    avg_r: float = 0.0
    expectancy: float = 0.0
    profit_factor: float = 0.0

    max_drawdown: float = 0.0
    max_drawdown_percent: float = 0.0
    best_day: float = 0.0
    worst_day: float = 0.0
    open_pl: float = 0.0

    def to_display(self) -> "TradeStatsDisplay":
        """
        Values as shown to the user: amounts and percentages rounded to
        2 decimals, an unbounded profit factor reported as None.
        """
        out = {}
        for name, value in self.model_dump().items():
            if isinstance(value, int):
                out[name] = value
            elif value is None or math.isinf(value):
                out[name] = None
            else:
                out[name] = round2(value)
        return TradeStatsDisplay(**out)


class TradeStatsDisplay(TradeStats):
    """Rounded statistics; profit_factor is None when there are no losses."""

    profit_factor: Optional[float] = 0.0


class TradeMetricsRequest(BaseModel):
    """Inputs of the per-trade metrics preview; all optional like a half-filled form."""
    direction: Optional[str] = None
    entry_price: Optional[float] = None
    exit_price: Optional[float] = None
    quantity: Optional[float] = None
    leverage: Optional[float] = None
    fees: Optional[float] = None
    commission: Optional[float] = None
    slippage: Optional[float] = None
