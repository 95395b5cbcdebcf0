"""
Shared helpers for the analytics core.

Trades reach the analytics functions either as ``TradeDTO`` instances or as
plain mappings (rows from the record store, API payloads). Every helper here
reads fields defensively: a value of the wrong type counts as missing, and
nothing raises.
"""

import math
from collections.abc import Mapping
from datetime import datetime, timezone, tzinfo
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Iterable, List, Optional

from src.commons.enums.trade_enums import TradeStatusEnum

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_HUNDRED = Decimal(100)
_HALF = Decimal("0.5")


def field_value(trade: Any, name: str) -> Any:
    if isinstance(trade, Mapping):
        return trade.get(name)
    return getattr(trade, name, None)


def finite_or_none(value: Any) -> Optional[float]:
    """Return ``value`` as float when it is a finite real number, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return value


def round2(value: float) -> float:
    """
    Round to 2 decimals with halves going up, towards +inf.

    Works on the shortest decimal representation of the float, so 1.005 is
    treated as the decimal 1.005 and becomes 1.01, while -1.005 becomes -1.0.
    """
    if not math.isfinite(value):
        return value
    cents = (Decimal(repr(value)) * _HUNDRED + _HALF).to_integral_value(rounding=ROUND_FLOOR)
    return float(cents / _HUNDRED)


def enum_text(value: Any) -> str:
    raw = getattr(value, "value", value)
    return str(raw).lower() if raw is not None else ""


def is_closed(trade: Any) -> bool:
    return enum_text(field_value(trade, "status")) == TradeStatusEnum.CLOSED.value


def is_open(trade: Any) -> bool:
    return enum_text(field_value(trade, "status")) == TradeStatusEnum.OPEN.value


def to_aware(value: Any) -> Optional[datetime]:
    """
    Normalise a timestamp to an aware datetime.

    Naive datetimes are read as host local time. ISO strings are parsed;
    anything else is None.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.astimezone()
    return value


def resolved_timestamp(trade: Any) -> Optional[datetime]:
    """Exit timestamp, falling back to the entry timestamp."""
    exit_ts = to_aware(field_value(trade, "exit_timestamp"))
    if exit_ts is not None:
        return exit_ts
    return to_aware(field_value(trade, "entry_timestamp"))


def chronological_key(trade: Any) -> datetime:
    return resolved_timestamp(trade) or _EPOCH


def local_datetime(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    if tz is None:
        return value.astimezone()
    return value.astimezone(tz)


def utc_day(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.astimezone(timezone.utc).date().isoformat()


def js_weekday(value: datetime) -> int:
    """Day index with 0 = Sunday .. 6 = Saturday."""
    return (value.weekday() + 1) % 7


def stored_profit_loss(trade: Any) -> Optional[float]:
    return finite_or_none(field_value(trade, "profit_loss"))


def chart_trades(trades: Iterable[Any]) -> List[Any]:
    """Closed trades with a stored P/L, oldest first."""
    closed = [
        t for t in trades
        if is_closed(t) and stored_profit_loss(t) is not None
    ]
    return sorted(closed, key=chronological_key)
