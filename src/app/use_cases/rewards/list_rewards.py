"""
List Rewards Use Cases

Read-only catalog listings, most recently listed first.
"""
from libs.result import Result, Return
from src.app.repositories.reward_repository import RewardRepository
from .dtos import RewardListResponseDTO
from .mappers import to_reward_dto


class ListAvailableRewards:
    """Use case: Rewards that can still be redeemed (quantity > 0)"""

    def __init__(self, reward_repo: RewardRepository):
        self.reward_repo = reward_repo

    async def execute(self) -> Result[RewardListResponseDTO]:
        rewards = await self.reward_repo.list_available()
        return Return.ok(
            RewardListResponseDTO(
                rewards=[to_reward_dto(reward) for reward in rewards],
                total=len(rewards),
            )
        )


class ListAllRewards:
    """Use case: Every reward in the catalog, including sold out ones"""

    def __init__(self, reward_repo: RewardRepository):
        self.reward_repo = reward_repo

    async def execute(self) -> Result[RewardListResponseDTO]:
        rewards = await self.reward_repo.list_all()
        return Return.ok(
            RewardListResponseDTO(
                rewards=[to_reward_dto(reward) for reward in rewards],
                total=len(rewards),
            )
        )
