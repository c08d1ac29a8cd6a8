"""Reward Repository Interface

Defines the contract for reward catalog persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.reward import Reward


class RewardRepository(ABC):

    @abstractmethod
    async def get_by_id(self, reward_id: int, for_update: bool = False) -> Optional[Reward]:
        """
        Retrieve reward by ID

        Args:
            reward_id: Reward ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Reward if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, reward: Reward) -> Reward:
        pass

    @abstractmethod
    async def update(self, reward: Reward) -> Reward:
        """Persist changed catalog fields of an already loaded reward"""
        pass

    @abstractmethod
    async def decrement_quantity(self, reward_id: int, quantity: int) -> None:
        """
        Take quantity units out of inventory

        Raises:
            WriteConflictError: If fewer than quantity units remain
        """
        pass

    @abstractmethod
    async def list_available(self) -> List[Reward]:
        """Rewards with quantity > 0, most recently listed first"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Reward]:
        """All rewards, most recently listed first"""
        pass
