"""Get Redemption History Use Case

Lists what a user has redeemed, newest first.
"""

from libs.result import Result, Return
from src.app.repositories.redemption_repository import RedemptionRepository
from .dtos import RedemptionHistoryItemDTO, RedemptionHistoryResponseDTO


class GetRedemptionHistory:
    """
    Use case: Redemption history of a user

    Read-only join of Redemption and Reward. total_cost is the frozen amount
    charged, not the reward's current price.
    """

    def __init__(self, redemption_repo: RedemptionRepository):
        self.redemption_repo = redemption_repo

    async def execute(self, user_id: str) -> Result[RedemptionHistoryResponseDTO]:
        rows = await self.redemption_repo.get_history_by_user_id(user_id)

        items = [
            RedemptionHistoryItemDTO(
                redemption_id=redemption.id,
                item=reward.name,
                description=reward.description,
                image_url=reward.image_url,
                quantity=redemption.quantity,
                total_cost=redemption.total_cost,
                redeemed_at=redemption.redeemed_at,
            )
            for redemption, reward in rows
        ]

        return Return.ok(RedemptionHistoryResponseDTO(user_id=user_id, redemptions=items))
