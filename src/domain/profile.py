"""Profile Domain Entity

Per-user credit balance. Each user has exactly one profile.
current_credits is a cached projection of the profile's credit transactions.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, Integer, String
from src.domain.base import BaseModel, IdType, TimestampType, utc_now


class Profile(BaseModel, table=True):
    """
    Profile - Tracks a user's spendable and lifetime credits

    Domain Rules:
    - One profile per user (user_id is unique)
    - current_credits must be non-negative
    - earned_credits never decreases
    - current_credits always equals the sum of the profile's transactions
    - Balances change only through AddCredits and RedeemReward
    """

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint('current_credits >= 0', name='current_credits_non_negative'),
        CheckConstraint('earned_credits >= 0', name='earned_credits_non_negative'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique profile identifier (auto-increment)"
    )

    user_id: str = Field(
        sa_column=Column(String(255), nullable=False, unique=True, index=True),
        description="Owning user reference (unique - one profile per user)"
    )

    display_name: str = Field(
        default="",
        sa_column=Column(String(255), nullable=False, default=""),
        description="Name shown on the leaderboard"
    )

    current_credits: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Spendable credit balance (must be >= 0)"
    )

    earned_credits: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Lifetime credits earned (monotonically non-decreasing)"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=TimestampType,
        description="Profile creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=TimestampType,
        description="Last balance update timestamp"
    )
