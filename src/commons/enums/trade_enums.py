from enum import Enum


class TradeDirectionEnum(str, Enum):
    LONG = "long"
    SHORT = "short"


class TradeStatusEnum(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class InstrumentTypeEnum(str, Enum):
    STOCKS = "stocks"
    FOREX = "forex"
    FUTURES = "futures"
    OPTIONS = "options"
    CRYPTO = "crypto"


class DateRangePresetEnum(str, Enum):
    LAST_10_DAYS = "last_10_days"
    LAST_WEEK = "last_week"
    LAST_MONTH = "last_month"
    LAST_3_MONTHS = "last_3_months"
    LAST_YEAR = "last_year"
    YTD = "ytd"
    ALL = "all"
    CUSTOM = "custom"
