"""SQLAlchemy implementation of RewardRepository

Inventory decrements are guarded UPDATE statements so stock can never go
below zero, even if two transactions race past the availability check.
"""

from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.reward_repository import RewardRepository
from src.app.services.unit_of_work import WriteConflictError
from src.domain.base import utc_now
from src.domain.reward import Reward


class SqlAlchemyRewardRepository(RewardRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, reward_id: int, for_update: bool = False) -> Optional[Reward]:
        stmt = select(Reward).where(Reward.id == reward_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, reward: Reward) -> Reward:
        self.session.add(reward)
        await self.session.flush()
        await self.session.refresh(reward)
        return reward

    async def update(self, reward: Reward) -> Reward:
        reward.updated_at = utc_now()
        self.session.add(reward)
        await self.session.flush()
        await self.session.refresh(reward)
        return reward

    async def decrement_quantity(self, reward_id: int, quantity: int) -> None:
        stmt = (
            update(Reward)
            .where(Reward.id == reward_id, Reward.quantity >= quantity)
            .values(quantity=Reward.quantity - quantity)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            raise WriteConflictError(
                f"Reward {reward_id} inventory changed concurrently (requested={quantity})"
            )

    async def list_available(self) -> List[Reward]:
        stmt = (
            select(Reward)
            .where(Reward.quantity > 0)
            .order_by(Reward.listed_at.desc(), Reward.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_all(self) -> List[Reward]:
        stmt = select(Reward).order_by(Reward.listed_at.desc(), Reward.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
