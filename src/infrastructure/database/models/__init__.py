from .base import Base, BaseModel
from .account_model import AccountModel
from .trade_model import TradeModel
from .strategy_model import StrategyModel


__all__ = [
    "Base",
    "BaseModel",
    "AccountModel",
    "TradeModel",
    "StrategyModel",
]
