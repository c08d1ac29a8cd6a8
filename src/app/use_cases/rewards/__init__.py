"""Reward catalog and redemption use cases"""
from .create_reward import CreateReward
from .update_reward import UpdateReward
from .list_rewards import ListAvailableRewards, ListAllRewards
from .redeem_reward import RedeemReward
from .get_redemption_history import GetRedemptionHistory
from .dtos import (
    CreateRewardCommandDTO,
    UpdateRewardCommandDTO,
    RewardDTO,
    RewardListResponseDTO,
    RedeemCommandDTO,
    RedemptionResponseDTO,
    RedemptionHistoryItemDTO,
    RedemptionHistoryResponseDTO,
)

__all__ = [
    "CreateReward",
    "UpdateReward",
    "ListAvailableRewards",
    "ListAllRewards",
    "RedeemReward",
    "GetRedemptionHistory",
    "CreateRewardCommandDTO",
    "UpdateRewardCommandDTO",
    "RewardDTO",
    "RewardListResponseDTO",
    "RedeemCommandDTO",
    "RedemptionResponseDTO",
    "RedemptionHistoryItemDTO",
    "RedemptionHistoryResponseDTO",
]
