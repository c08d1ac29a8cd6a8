"""SQLAlchemy implementation of RedemptionRepository"""

from typing import List, Optional, Tuple
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.redemption_repository import RedemptionRepository
from src.domain.redemption import Redemption
from src.domain.reward import Reward


class SqlAlchemyRedemptionRepository(RedemptionRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, redemption: Redemption) -> Redemption:
        self.session.add(redemption)
        await self.session.flush()
        await self.session.refresh(redemption)
        return redemption

    async def get_by_id(self, redemption_id: int) -> Optional[Redemption]:
        stmt = select(Redemption).where(Redemption.id == redemption_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_history_by_user_id(self, user_id: str) -> List[Tuple[Redemption, Reward]]:
        stmt = (
            select(Redemption, Reward)
            .join(Reward, Reward.id == Redemption.reward_id)
            .where(Redemption.user_id == user_id)
            .order_by(Redemption.redeemed_at.desc(), Redemption.id.desc())
        )
        result = await self.session.execute(stmt)
        return [(redemption, reward) for redemption, reward in result.all()]
