"""Redemption Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.domain.redemption import Redemption
from src.domain.reward import Reward


class RedemptionRepository(ABC):

    @abstractmethod
    async def create(self, redemption: Redemption) -> Redemption:
        pass

    @abstractmethod
    async def get_by_id(self, redemption_id: int) -> Optional[Redemption]:
        pass

    @abstractmethod
    async def get_history_by_user_id(self, user_id: str) -> List[Tuple[Redemption, Reward]]:
        """
        A user's redemptions joined with their rewards

        Returns:
            (redemption, reward) pairs ordered by redeemed_at DESC, then id DESC
        """
        pass
