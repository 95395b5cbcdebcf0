from datetime import date, datetime
from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from src.commons.enums.trade_enums import (
    InstrumentTypeEnum,
    TradeDirectionEnum,
    TradeStatusEnum,
)
from src.commons.partial_update import PartialUpdateDTO

# fields that feed compute_trade_metrics; a change to any of them invalidates the cache
METRIC_INPUT_FIELDS = (
    "direction",
    "entry_price",
    "exit_price",
    "quantity",
    "leverage",
    "fees",
    "commission",
    "slippage",
    "status",
)


class TradeDTO(BaseModel):
    """
    Trade record as stored in the record store.

    Only types are checked here; the analytics core copes with degenerate
    values coming back from storage.
    """

    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    user_id: Optional[str] = None
    account_id: Optional[str] = None

    symbol: str
    instrument_type: InstrumentTypeEnum = InstrumentTypeEnum.STOCKS
    direction: TradeDirectionEnum = TradeDirectionEnum.LONG
    quantity: float
    leverage: Optional[float] = None

    entry_price: float
    exit_price: Optional[float] = None
    entry_timestamp: datetime
    exit_timestamp: Optional[datetime] = None

    fees: float = 0.0
    commission: float = 0.0
    slippage: float = 0.0

    profit_loss: Optional[float] = None
    profit_loss_percent: Optional[float] = None
    r_multiple: Optional[float] = None

    strategy: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    status: TradeStatusEnum = TradeStatusEnum.OPEN

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TradeCreateDTO(BaseModel):
    """Payload of the trade form."""

    account_id: str
    symbol: str = Field(..., min_length=1)
    instrument_type: InstrumentTypeEnum = InstrumentTypeEnum.STOCKS
    direction: TradeDirectionEnum = TradeDirectionEnum.LONG
    quantity: float = Field(..., gt=0.0)
    leverage: Optional[float] = Field(default=None, gt=0.0)

    entry_price: float
    exit_price: Optional[float] = None
    entry_timestamp: datetime
    exit_timestamp: Optional[datetime] = None

    fees: float = Field(default=0.0, ge=0.0)
    commission: float = Field(default=0.0, ge=0.0)
    slippage: float = Field(default=0.0, ge=0.0)
    r_multiple: Optional[float] = None

    strategy: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    status: TradeStatusEnum = TradeStatusEnum.OPEN


class TradeUpdateDTO(PartialUpdateDTO):
    non_nullable: ClassVar[Tuple[str, ...]] = (
        "account_id",
        "symbol",
        "instrument_type",
        "direction",
        "quantity",
        "entry_price",
        "entry_timestamp",
        "fees",
        "commission",
        "slippage",
        "tags",
        "status",
    )

    account_id: Optional[str] = None
    symbol: Optional[str] = Field(default=None, min_length=1)
    instrument_type: Optional[InstrumentTypeEnum] = None
    direction: Optional[TradeDirectionEnum] = None
    quantity: Optional[float] = Field(default=None, gt=0.0)
    leverage: Optional[float] = Field(default=None, gt=0.0)

    entry_price: Optional[float] = None
    exit_price: Optional[float] = None
    entry_timestamp: Optional[datetime] = None
    exit_timestamp: Optional[datetime] = None

    fees: Optional[float] = Field(default=None, ge=0.0)
    commission: Optional[float] = Field(default=None, ge=0.0)
    slippage: Optional[float] = Field(default=None, ge=0.0)
    r_multiple: Optional[float] = None

    strategy: Optional[str] = None
    tags: Optional[List[str]] = None
    notes: Optional[str] = None
    status: Optional[TradeStatusEnum] = None


class TradeFilterDTO(BaseModel):
    search: Optional[str] = None
    account_id: Optional[str] = None
    status: Optional[TradeStatusEnum] = None
    direction: Optional[TradeDirectionEnum] = None
    strategy: Optional[str] = None
    min_pl: Optional[float] = None
    max_pl: Optional[float] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None

