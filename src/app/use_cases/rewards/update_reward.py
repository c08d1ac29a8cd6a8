"""UpdateReward Use Case

Catalog management: restock, reprice or edit a reward.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.reward_repository import RewardRepository
from .dtos import UpdateRewardCommandDTO, RewardDTO
from .mappers import to_reward_dto

logger = logging.getLogger(__name__)


class UpdateReward:
    """
    Use Case: Update catalog fields of a reward

    Business Rules:
    1. Only fields explicitly set on the command change
    2. The row is locked so a restock cannot overwrite a concurrent redemption
    3. Past redemptions keep the cost they were charged
    """

    def __init__(self, uow: UnitOfWork, reward_repo: RewardRepository):
        self.uow = uow
        self.reward_repo = reward_repo

    async def execute(self, command: UpdateRewardCommandDTO) -> Result[RewardDTO]:
        try:
            reward = await self.reward_repo.get_by_id(command.reward_id, for_update=True)

            if not reward:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="REWARD_NOT_FOUND",
                        message=f"Reward {command.reward_id} not found",
                    )
                )

            changes = command.model_dump(exclude_unset=True, exclude={"reward_id"})
            for field, value in changes.items():
                setattr(reward, field, value)

            reward = await self.reward_repo.update(reward)
            await self.uow.commit()

            logger.info(f"Updated reward {reward.id}: {sorted(changes)}")
            return Return.ok(to_reward_dto(reward))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Updating reward {command.reward_id} failed: {e}")
            return Return.err(
                Error(
                    code="UPDATE_REWARD_FAILED",
                    message=f"Failed to update reward {command.reward_id}",
                    reason=str(e),
                )
            )
