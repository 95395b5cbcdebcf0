from typing import Any

from src.commons.enums.trade_enums import TradeDirectionEnum
from src.domain.analytics.dtos.trade_stats import TradeMetricsDTO
from src.domain.analytics.helpers import enum_text, field_value, finite_or_none, round2


def compute_trade_metrics(trade: Any) -> TradeMetricsDTO:
    """
    Realised P/L and percent return of a single trade.

    Returns both values as None when entry or exit price is not a finite
    number, or when the quantity is 0. Leverage defaults to 1, costs to 0.
    Direction other than "short" is priced as long.
    """
    entry = finite_or_none(field_value(trade, "entry_price"))
    exit_price = finite_or_none(field_value(trade, "exit_price"))
    quantity = finite_or_none(field_value(trade, "quantity")) or 0.0

    if entry is None or exit_price is None or quantity == 0:
        return TradeMetricsDTO()

    leverage = finite_or_none(field_value(trade, "leverage"))
    if leverage is None:
        leverage = 1.0

    costs = sum(
        finite_or_none(field_value(trade, name)) or 0.0
        for name in ("fees", "commission", "slippage")
    )

    if enum_text(field_value(trade, "direction")) == TradeDirectionEnum.SHORT.value:
        pnl_per_unit = entry - exit_price
    else:
        pnl_per_unit = exit_price - entry

    gross = pnl_per_unit * quantity * leverage
    profit_loss = gross - costs

    notional = entry * quantity * leverage
    profit_loss_percent = (profit_loss / notional) * 100 if notional != 0 else None

    return TradeMetricsDTO(
        profit_loss=round2(profit_loss),
        profit_loss_percent=(
            round2(profit_loss_percent) if profit_loss_percent is not None else None
        ),
    )
