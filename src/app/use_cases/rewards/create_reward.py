"""CreateReward Use Case

Adds a reward to the catalog.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.reward_repository import RewardRepository
from src.domain.reward import Reward
from .dtos import CreateRewardCommandDTO, RewardDTO
from .mappers import to_reward_dto

logger = logging.getLogger(__name__)


class CreateReward:
    """
    Use Case: List a new reward

    Pure insert. Field constraints (non-empty name, non-negative quantity and
    costs) are enforced by CreateRewardCommandDTO and the table constraints.
    """

    def __init__(self, uow: UnitOfWork, reward_repo: RewardRepository):
        self.uow = uow
        self.reward_repo = reward_repo

    async def execute(self, command: CreateRewardCommandDTO) -> Result[RewardDTO]:
        try:
            reward = await self.reward_repo.create(
                Reward(
                    name=command.name,
                    description=command.description,
                    image_url=command.image_url,
                    quantity=command.quantity,
                    default_cost=command.default_cost,
                    discount_cost=command.discount_cost,
                )
            )
            await self.uow.commit()

            logger.info(f"Listed reward {reward.id} ({reward.name}) with quantity {reward.quantity}")
            return Return.ok(to_reward_dto(reward))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Listing reward {command.name!r} failed: {e}")
            return Return.err(
                Error(
                    code="CREATE_REWARD_FAILED",
                    message="Failed to create reward",
                    reason=str(e),
                )
            )
