"""Data Transfer Objects for Reward Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CreateRewardCommandDTO(BaseModel):
    """
    Command DTO for listing a new reward

    Used as input to CreateReward use case.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name (required, non-empty)"
    )

    description: str = Field(
        default="",
        description="Long description"
    )

    image_url: Optional[str] = Field(
        default=None,
        max_length=1024,
        description="Image shown in the catalog"
    )

    quantity: int = Field(
        ...,
        ge=0,
        description="Units in inventory (must be >= 0)"
    )

    default_cost: int = Field(
        ...,
        ge=0,
        description="Regular unit cost in credits (must be >= 0)"
    )

    discount_cost: Optional[int] = Field(
        default=None,
        ge=0,
        description="Discounted unit cost (None or 0 = no discount)"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Hoodie",
                "description": "Limited edition club hoodie",
                "image_url": "https://cdn.example.com/hoodie.png",
                "quantity": 25,
                "default_cost": 500,
                "discount_cost": 400,
            }
        }
    )


class UpdateRewardCommandDTO(BaseModel):
    """
    Command DTO for catalog management updates

    Only fields explicitly set are applied. Setting discount_cost to None
    removes the discount.
    """

    reward_id: int
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, max_length=1024)
    quantity: Optional[int] = Field(default=None, ge=0)
    default_cost: Optional[int] = Field(default=None, ge=0)
    discount_cost: Optional[int] = Field(default=None, ge=0)


class RewardDTO(BaseModel):
    reward_id: int
    name: str
    description: str
    image_url: Optional[str] = None
    quantity: int
    default_cost: int
    discount_cost: Optional[int] = None
    unit_cost: int = Field(..., description="Effective price per unit")
    listed_at: datetime


class RewardListResponseDTO(BaseModel):
    rewards: List[RewardDTO]
    total: int


class RedeemCommandDTO(BaseModel):
    """
    Command DTO for redeeming a reward

    quantity is checked by the use case so a value below 1 comes back as
    invalid_quantity rather than a validation exception.
    """

    reward_id: int = Field(
        ...,
        description="Reward to redeem"
    )

    profile_id: int = Field(
        ...,
        description="Profile paying for the reward (already authenticated by the caller)"
    )

    quantity: int = Field(
        default=1,
        description="Units to redeem (must be >= 1)"
    )


class RedemptionResponseDTO(BaseModel):
    """
    Response DTO for a successful redemption

    Returned by RedeemReward.
    """

    redemption_id: int
    reward_id: int
    profile_id: int
    transaction_id: int
    quantity: int
    unit_cost: int
    total_cost: int = Field(..., description="Credits spent (frozen at redemption time)")
    balance_after: int = Field(..., description="current_credits after the debit")
    remaining_quantity: int = Field(..., description="Reward inventory after the redemption")
    redeemed_at: datetime


class RedemptionHistoryItemDTO(BaseModel):
    redemption_id: int
    item: str = Field(..., description="Reward name")
    description: str
    image_url: Optional[str] = None
    quantity: int
    total_cost: int
    redeemed_at: datetime


class RedemptionHistoryResponseDTO(BaseModel):
    user_id: str
    redemptions: List[RedemptionHistoryItemDTO]
