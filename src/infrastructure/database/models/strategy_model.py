"""
Strategy Database Model

SQLAlchemy model for the playbook entries attached to an account.
"""

from sqlalchemy import Boolean, Column, ForeignKey, String, Text
from uuid import uuid4

from src.infrastructure.database.models.base import BaseModel


class StrategyModel(BaseModel):
    """Strategy database model."""
    __tablename__ = 'strategies'

    id = Column(String, primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String, nullable=False, index=True)
    account_id = Column(String, ForeignKey('accounts.id', ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    body = Column(Text, nullable=False, default="")
    is_bulleted = Column(Boolean, nullable=False, default=False)
