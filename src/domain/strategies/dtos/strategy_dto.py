from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from src.commons.partial_update import PartialUpdateDTO


class StrategyDTO(BaseModel):
    """
    A playbook entry of an account.

    Trades reference a strategy by its ``title`` through ``TradeDTO.strategy``.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    account_id: str
    title: str
    body: str = ""
    is_bulleted: bool = False
    created_at: Optional[datetime] = None


class StrategyCreateDTO(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    account_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    body: str = ""
    is_bulleted: bool = False


class StrategyUpdateDTO(PartialUpdateDTO):
    model_config = ConfigDict(str_strip_whitespace=True)

    non_nullable: ClassVar[Tuple[str, ...]] = ("account_id", "title", "body", "is_bulleted")

    account_id: Optional[str] = Field(default=None, min_length=1)
    title: Optional[str] = Field(default=None, min_length=1)
    body: Optional[str] = None
    is_bulleted: Optional[bool] = None
