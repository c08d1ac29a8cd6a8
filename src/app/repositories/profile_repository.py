"""Profile Repository Interface

Defines the contract for profile persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.profile import Profile


class ProfileRepository(ABC):
    """
    Repository interface for Profile persistence

    Balance mutations are single SQL statements so they stay correct
    even when the caller holds no row lock.
    """

    @abstractmethod
    async def get_by_id(self, profile_id: int, for_update: bool = False) -> Optional[Profile]:
        """
        Retrieve profile by ID

        Args:
            profile_id: Profile ID
            for_update: If True, lock the row with SELECT FOR UPDATE (pessimistic lock)

        Returns:
            Profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        pass

    @abstractmethod
    async def create(self, profile: Profile) -> Profile:
        """
        Create a new profile

        Returns:
            Created Profile with generated ID
        """
        pass

    @abstractmethod
    async def credit(self, profile_id: int, amount: int) -> None:
        """
        Add amount to both current_credits and earned_credits

        Args:
            profile_id: Profile ID
            amount: Positive credit amount
        """
        pass

    @abstractmethod
    async def debit(self, profile_id: int, amount: int) -> None:
        """
        Subtract amount from current_credits

        Args:
            profile_id: Profile ID
            amount: Non-negative debit amount

        Raises:
            WriteConflictError: If the balance no longer covers amount
        """
        pass

    @abstractmethod
    async def get_all(self) -> List[Profile]:
        pass

    @abstractmethod
    async def get_top_by_earned_credits(self, limit: int) -> List[Profile]:
        """
        Profiles ordered by earned_credits DESC, then id ASC

        Args:
            limit: Maximum number of profiles to return
        """
        pass
