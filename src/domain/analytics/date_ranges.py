from datetime import datetime, timedelta, tzinfo
from typing import Any, Iterable, List, Optional, Union

import pandas as pd

from src.commons.enums.trade_enums import DateRangePresetEnum
from src.domain.analytics.dtos.dashboard_dto import DateRange
from src.domain.analytics.helpers import resolved_timestamp, to_aware


def filter_trades_by_date_range(
    trades: Iterable[Any],
    start: Optional[datetime],
    end: Optional[datetime],
) -> List[Any]:
    """
    Keep trades whose resolved date (exit, else entry) lies in [start, end].

    A None bound leaves that side open. Trades without any timestamp only
    pass when both bounds are None.
    """
    start = to_aware(start)
    end = to_aware(end)

    selected = []
    for trade in trades:
        ts = resolved_timestamp(trade)
        if ts is None:
            if start is None and end is None:
                selected.append(trade)
            continue
        if start is not None and ts < start:
            continue
        if end is not None and ts > end:
            continue
        selected.append(trade)
    return selected


def _months_back(moment: datetime, months: int) -> datetime:
    return (pd.Timestamp(moment) - pd.DateOffset(months=months)).to_pydatetime()


def get_date_range_preset(
    name: Union[str, DateRangePresetEnum, None],
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> DateRange:
    """
    Resolve a named preset into a concrete window ending now.

    Unknown names fall back to ``last_month``.
    """
    if now is None:
        end = datetime.now(tz) if tz is not None else datetime.now().astimezone()
    else:
        end = to_aware(now)

    preset = str(getattr(name, "value", name) or "").lower()

    if preset == DateRangePresetEnum.LAST_10_DAYS.value:
        start = end - timedelta(days=10)
    elif preset == DateRangePresetEnum.LAST_WEEK.value:
        start = end - timedelta(days=7)
    elif preset == DateRangePresetEnum.LAST_3_MONTHS.value:
        start = _months_back(end, 3)
    elif preset == DateRangePresetEnum.LAST_YEAR.value:
        start = _months_back(end, 12)
    elif preset == DateRangePresetEnum.YTD.value:
        start = end.replace(month=1, day=1)
    elif preset == DateRangePresetEnum.ALL.value:
        start = end.replace(year=1970, month=1, day=1)
    else:
        start = _months_back(end, 1)

    return DateRange(start=start, end=end)
