"""
Account Database Model

SQLAlchemy model for trading accounts.
"""

from sqlalchemy import Column, String, Float
from uuid import uuid4

from src.infrastructure.database.models.base import BaseModel


class AccountModel(BaseModel):
    """Account database model."""
    __tablename__ = 'accounts'

    id = Column(String, primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    account_type = Column(String, nullable=False, default="live")
    currency = Column(String(3), nullable=False, default="USD")
    initial_balance = Column(Float, nullable=False, default=0.0)
