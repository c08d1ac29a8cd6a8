"""Redemption Domain Entity

Immutable history record of a completed reward exchange.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from src.domain.base import BaseModel, IdType, TimestampType, utc_now


class RedemptionFailure(str, Enum):
    """Reasons a redemption request can fail"""
    UNAVAILABLE = "unavailable"            # Reward missing or not enough inventory
    INSUFFICIENT = "insufficient"          # Profile balance too low
    INVALID_QUANTITY = "invalid_quantity"  # Requested quantity < 1
    UNKNOWN = "unknown"                    # Storage failure, exhausted retries


class Redemption(BaseModel, table=True):
    """
    Redemption - Frozen record of a reward exchange

    Domain Rules:
    - Immutable once created
    - total_cost = unit_cost * quantity at redemption time, never recomputed
    - transaction_id points at the matching REDEEM credit transaction
    """

    __tablename__ = "redemptions"
    __table_args__ = (
        CheckConstraint('quantity >= 1', name='redemption_quantity_positive'),
        CheckConstraint('total_cost >= 0', name='total_cost_non_negative'),
        Index('ix_redemptions_user_redeemed', 'user_id', 'redeemed_at'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique redemption identifier (auto-increment)"
    )

    user_id: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="User who redeemed the reward"
    )

    profile_id: int = Field(
        sa_column=Column(IdType, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Profile"
    )

    reward_id: int = Field(
        sa_column=Column(IdType, ForeignKey("rewards.id"), nullable=False),
        description="Foreign key to Reward"
    )

    transaction_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("credit_transactions.id"), nullable=True),
        description="Debit transaction recorded for this redemption"
    )

    quantity: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Units redeemed"
    )

    unit_cost: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Resolved unit cost at redemption time"
    )

    total_cost: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Credits spent (frozen)"
    )

    redeemed_at: datetime = Field(
        default_factory=utc_now,
        sa_type=TimestampType,
        description="Redemption timestamp"
    )
