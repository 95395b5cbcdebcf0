from typing import Optional
from pydantic import BaseModel

from src.commons.enums.trade_enums import TradeDirectionEnum


class PositionSizeRequest(BaseModel):
    direction: TradeDirectionEnum = TradeDirectionEnum.LONG
    entry: float
    stop_loss: float
    risk_percent: float = 2.0
    reward_ratio: float = 2.0
    principal: Optional[float] = None
    value_per_point: float = 1.0
    leverage: float = 1.0
    allow_fractional: bool = True
    account_id: Optional[str] = None


class PositionSizeResult(BaseModel):
    entry: float
    stop_loss: float
    sl_distance: float
    risk_amount: float
    position_size_units: float
    position_size_lots: float
    units_per_lot: int
    margin_required: float
    tp_distance: float
    take_profit: float
    potential_profit: float
    value_per_point: float
    leverage: float
