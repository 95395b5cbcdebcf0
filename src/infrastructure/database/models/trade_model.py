"""
Trade Database Model

SQLAlchemy model for journal trades.
"""

from sqlalchemy import Column, String, Float, DateTime, ForeignKey, JSON, Text, CheckConstraint
from uuid import uuid4

from src.infrastructure.database.models.base import BaseModel


class TradeModel(BaseModel):
    """Trade database model."""

    __tablename__ = 'trades'
    __table_args__ = (
        CheckConstraint("direction IN ('long','short')", name="ck_trades_direction"),
        CheckConstraint("status IN ('open','closed')", name="ck_trades_status"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String, nullable=False, index=True)
    account_id = Column(String, ForeignKey('accounts.id', ondelete="CASCADE"), nullable=False, index=True)

    symbol = Column(String, nullable=False)
    instrument_type = Column(String, nullable=False, default="stocks")
    direction = Column(String, nullable=False)
    quantity = Column(Float, nullable=False)
    leverage = Column(Float, nullable=True)

    entry_price = Column(Float, nullable=False)
    exit_price = Column(Float, nullable=True)
    entry_timestamp = Column(DateTime(timezone=True), nullable=False)
    exit_timestamp = Column(DateTime(timezone=True), nullable=True)

    fees = Column(Float, nullable=False, default=0.0)
    commission = Column(Float, nullable=False, default=0.0)
    slippage = Column(Float, nullable=False, default=0.0)

    profit_loss = Column(Float, nullable=True)
    profit_loss_percent = Column(Float, nullable=True)
    r_multiple = Column(Float, nullable=True)

    strategy = Column(String, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    notes = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="open")
