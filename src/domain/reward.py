"""Reward Domain Entity

Catalog item redeemable for credits, backed by finite inventory.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Integer, String, Text
from src.domain.base import BaseModel, IdType, TimestampType, utc_now
from src.domain.pricing import resolve_unit_cost


class Reward(BaseModel, table=True):
    """
    Reward - Inventory-backed redeemable item

    Domain Rules:
    - quantity must be non-negative
    - Costs must be non-negative
    - Effective unit cost is discount_cost when set and positive, else default_cost
    - quantity is decremented only by RedeemReward; catalog updates may restock
    """

    __tablename__ = "rewards"
    __table_args__ = (
        CheckConstraint('quantity >= 0', name='quantity_non_negative'),
        CheckConstraint('default_cost >= 0', name='default_cost_non_negative'),
        CheckConstraint('discount_cost IS NULL OR discount_cost >= 0', name='discount_cost_non_negative'),
        Index('ix_rewards_listed_at', 'listed_at'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique reward identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Display name of the reward"
    )

    description: str = Field(
        default="",
        sa_column=Column(Text, nullable=False, default=""),
        description="Long description"
    )

    image_url: Optional[str] = Field(
        default=None,
        sa_column=Column(String(1024), nullable=True),
        description="Image shown in the catalog"
    )

    quantity: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Units left in inventory (must be >= 0)"
    )

    default_cost: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Regular unit cost in credits"
    )

    discount_cost: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
        description="Discounted unit cost (None or 0 = no discount)"
    )

    listed_at: datetime = Field(
        default_factory=utc_now,
        sa_type=TimestampType,
        description="Listing timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=TimestampType,
        description="Last catalog update timestamp"
    )

    @property
    def unit_cost(self) -> int:
        return resolve_unit_cost(self.default_cost, self.discount_cost)
