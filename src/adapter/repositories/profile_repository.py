"""SQLAlchemy implementation of ProfileRepository

Provides persistence for Profile entities with pessimistic locking support
and guarded balance updates that never drive a balance below zero.
"""

from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.profile_repository import ProfileRepository
from src.app.services.unit_of_work import WriteConflictError
from src.domain.base import utc_now
from src.domain.profile import Profile


class SqlAlchemyProfileRepository(ProfileRepository):
    """
    SQLAlchemy implementation of ProfileRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE
    - Balance changes as single UPDATE statements
    - Debits guarded by current_credits >= amount
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, profile_id: int, for_update: bool = False) -> Optional[Profile]:
        """
        Retrieve profile by ID with optional row-level locking

        Args:
            profile_id: Profile ID
            for_update: If True, locks the row with SELECT FOR UPDATE (prevents concurrent modifications)

        Returns:
            Profile if found, None otherwise
        """
        stmt = select(Profile).where(Profile.id == profile_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        stmt = select(Profile).where(Profile.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, profile: Profile) -> Profile:
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def credit(self, profile_id: int, amount: int) -> None:
        stmt = (
            update(Profile)
            .where(Profile.id == profile_id)
            .values(
                current_credits=Profile.current_credits + amount,
                earned_credits=Profile.earned_credits + amount,
                updated_at=utc_now(),
            )
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            raise WriteConflictError(f"Profile {profile_id} disappeared during credit")

    async def debit(self, profile_id: int, amount: int) -> None:
        """
        Subtract amount from current_credits

        Note:
            Should be called within a transaction with the profile already locked.
            The WHERE guard still rejects the write if the balance changed underneath.
        """
        stmt = (
            update(Profile)
            .where(Profile.id == profile_id, Profile.current_credits >= amount)
            .values(
                current_credits=Profile.current_credits - amount,
                updated_at=utc_now(),
            )
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            raise WriteConflictError(
                f"Profile {profile_id} balance changed concurrently (debit={amount})"
            )

    async def get_all(self) -> List[Profile]:
        stmt = select(Profile).order_by(Profile.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_top_by_earned_credits(self, limit: int) -> List[Profile]:
        stmt = (
            select(Profile)
            .order_by(Profile.earned_credits.desc(), Profile.id.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
