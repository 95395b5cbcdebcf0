import math
from typing import Optional

from src.commons.enums.trade_enums import TradeDirectionEnum
from src.domain.analytics.helpers import finite_or_none
from src.domain.calculator.dtos.position_size_dto import (
    PositionSizeRequest,
    PositionSizeResult,
)

UNITS_PER_LOT = 100


def calculate_position_size(request: PositionSizeRequest) -> Optional[PositionSizeResult]:
    """
    Size a position so that hitting the stop loses ``risk_percent`` of the
    principal, and place the take-profit at ``reward_ratio`` times the stop
    distance.

    Returns None when the inputs cannot produce a size (missing or
    non-finite numbers, non-positive principal, leverage or point value,
    stop equal to entry).
    """
    numbers = [
        finite_or_none(v)
        for v in (
            request.entry,
            request.stop_loss,
            request.risk_percent,
            request.reward_ratio,
            request.principal,
            request.value_per_point,
            request.leverage,
        )
    ]
    if any(n is None for n in numbers):
        return None
    entry, stop, risk_percent, reward_ratio, principal, value_per_point, leverage = numbers

    if principal <= 0 or leverage <= 0 or value_per_point <= 0:
        return None

    sl_distance = abs(entry - stop)
    if sl_distance == 0:
        return None

    risk_amount = principal * (risk_percent / 100)

    lots = risk_amount / (sl_distance * value_per_point) / UNITS_PER_LOT
    if not request.allow_fractional:
        lots = math.floor(lots)
    lots = max(0.0, lots)
    units = lots * UNITS_PER_LOT

    tp_distance = sl_distance * reward_ratio
    if request.direction == TradeDirectionEnum.LONG:
        take_profit = entry + tp_distance
    else:
        take_profit = entry - tp_distance

    return PositionSizeResult(
        entry=entry,
        stop_loss=stop,
        sl_distance=sl_distance,
        risk_amount=risk_amount,
        position_size_units=units,
        position_size_lots=lots,
        units_per_lot=UNITS_PER_LOT,
        margin_required=units * entry / leverage,
        tp_distance=tp_distance,
        take_profit=take_profit,
        potential_profit=tp_distance * units * value_per_point,
        value_per_point=value_per_point,
        leverage=leverage,
    )
