import pytest
import pytest_asyncio
from sqlalchemy import func
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  (registers tables on SQLModel.metadata)
from src.depends import build_engine
from src.adapter.repositories import (
    SqlAlchemyCreditTransactionRepository,
    SqlAlchemyProfileRepository,
    SqlAlchemyRedemptionRepository,
    SqlAlchemyRewardRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.ledger import (
    AddCredits,
    AddCreditsCommandDTO,
    CreateProfile,
    CreateProfileCommandDTO,
)
from src.app.use_cases.rewards import (
    CreateReward,
    CreateRewardCommandDTO,
    RedeemCommandDTO,
    RedeemReward,
)
from src.domain.credit_transaction import CreditTransaction
from src.domain.profile import Profile
from src.domain.reward import Reward


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """File-backed SQLite database, so concurrent sessions share one store"""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'rewards_test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_profile(session_factory):
    """Open a profile and fund it through AddCredits so the ledger stays consistent"""
    async def _make(user_id: str, credits: int = 0, display_name: str = "") -> int:
        async with session_factory() as session:
            result = await CreateProfile(
                SqlAlchemyUnitOfWork(session), SqlAlchemyProfileRepository(session)
            ).execute(CreateProfileCommandDTO(user_id=user_id, display_name=display_name))
            assert result.is_ok(), result.error
            profile_id = result.value.profile_id

        if credits:
            funded = await run_add_credits_in(session_factory, profile_id, credits, "seed")
            assert funded.is_ok(), funded.error

        return profile_id

    return _make


@pytest.fixture
def make_reward(session_factory):
    async def _make(**fields) -> int:
        fields.setdefault("name", "Sticker pack")
        async with session_factory() as session:
            result = await CreateReward(
                SqlAlchemyUnitOfWork(session), SqlAlchemyRewardRepository(session)
            ).execute(CreateRewardCommandDTO(**fields))
            assert result.is_ok(), result.error
            return result.value.reward_id

    return _make


async def run_add_credits_in(session_factory, profile_id, amount, event_id=None, idempotency_key=None):
    async with session_factory() as session:
        use_case = AddCredits(
            SqlAlchemyUnitOfWork(session),
            SqlAlchemyProfileRepository(session),
            SqlAlchemyCreditTransactionRepository(session),
        )
        return await use_case.execute(
            AddCreditsCommandDTO(
                profile_id=profile_id,
                amount=amount,
                event_id=event_id,
                idempotency_key=idempotency_key,
            )
        )


@pytest.fixture
def add_credits(session_factory):
    """Run AddCredits in its own session, like an independent request"""
    async def _add(profile_id, amount, event_id=None, idempotency_key=None):
        return await run_add_credits_in(session_factory, profile_id, amount, event_id, idempotency_key)

    return _add


@pytest.fixture
def redeem(session_factory):
    """Run RedeemReward in its own session, like an independent request"""
    async def _redeem(reward_id, profile_id, quantity=1):
        async with session_factory() as session:
            use_case = RedeemReward(
                uow=SqlAlchemyUnitOfWork(session),
                reward_repo=SqlAlchemyRewardRepository(session),
                profile_repo=SqlAlchemyProfileRepository(session),
                transaction_repo=SqlAlchemyCreditTransactionRepository(session),
                redemption_repo=SqlAlchemyRedemptionRepository(session),
            )
            return await use_case.execute(
                RedeemCommandDTO(reward_id=reward_id, profile_id=profile_id, quantity=quantity)
            )

    return _redeem


@pytest.fixture
def store(session_factory):
    """Fresh-session reads of the persisted state"""

    class Store:
        async def profile(self, profile_id) -> Profile:
            async with session_factory() as session:
                return await session.get(Profile, profile_id)

        async def reward(self, reward_id) -> Reward:
            async with session_factory() as session:
                return await session.get(Reward, reward_id)

        async def ledger_sum(self, profile_id) -> int:
            async with session_factory() as session:
                return await SqlAlchemyCreditTransactionRepository(
                    session
                ).get_transaction_sum_by_profile(profile_id)

        async def count(self, model) -> int:
            async with session_factory() as session:
                result = await session.execute(select(func.count()).select_from(model))
                return result.scalar_one()

        async def transactions(self, profile_id):
            async with session_factory() as session:
                result = await session.execute(
                    select(CreditTransaction)
                    .where(CreditTransaction.profile_id == profile_id)
                    .order_by(CreditTransaction.id)
                )
                return list(result.scalars().all())

        async def assert_ledger_consistent(self, profile_id):
            profile = await self.profile(profile_id)
            assert profile.current_credits >= 0
            assert profile.current_credits == await self.ledger_sum(profile_id)

    return Store()
