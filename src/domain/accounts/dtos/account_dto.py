from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from src.commons.partial_update import PartialUpdateDTO


class AccountDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    account_type: str = "live"
    currency: str = "USD"
    initial_balance: float = 0.0
    created_at: Optional[datetime] = None


class AccountCreateDTO(BaseModel):
    """Payload of the account form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    account_type: str = Field(default="live", min_length=1)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    initial_balance: float = Field(default=10_000.0, ge=0.0)


class AccountUpdateDTO(PartialUpdateDTO):
    model_config = ConfigDict(str_strip_whitespace=True)

    non_nullable: ClassVar[Tuple[str, ...]] = (
        "name",
        "account_type",
        "currency",
        "initial_balance",
    )

    name: Optional[str] = Field(default=None, min_length=1)
    account_type: Optional[str] = Field(default=None, min_length=1)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    initial_balance: Optional[float] = Field(default=None, ge=0.0)
