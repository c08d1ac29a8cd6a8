from src.domain.reward import Reward
from .dtos import RewardDTO


def to_reward_dto(reward: Reward) -> RewardDTO:
    return RewardDTO(
        reward_id=reward.id,
        name=reward.name,
        description=reward.description,
        image_url=reward.image_url,
        quantity=reward.quantity,
        default_cost=reward.default_cost,
        discount_cost=reward.discount_cost,
        unit_cost=reward.unit_cost,
        listed_at=reward.listed_at,
    )
