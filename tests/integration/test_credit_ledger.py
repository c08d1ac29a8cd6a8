"""Integration tests for credit issuance, balances and the ledger invariant"""

import asyncio

import pytest
from sqlalchemy.exc import IntegrityError

from src.adapter.repositories import (
    SqlAlchemyCreditTransactionRepository,
    SqlAlchemyProfileRepository,
    SqlAlchemyRewardRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.unit_of_work import WriteConflictError
from src.app.use_cases.ledger import (
    CreateProfile,
    CreateProfileCommandDTO,
    GetBalance,
    ListTransactions,
    ReconcileLedger,
)
from src.domain.credit_transaction import CreditTransaction, TransactionType
from src.domain.profile import Profile


@pytest.mark.asyncio
class TestAddCredits:

    async def test_deposit_raises_both_balances(self, make_profile, add_credits, store):
        profile_id = await make_profile("earner", credits=100)

        result = await add_credits(profile_id, 50, event_id="meetup")

        assert result.is_ok()
        assert result.value.transaction_type == TransactionType.EARN.value
        assert result.value.balance_after == 150

        profile = await store.profile(profile_id)
        assert profile.current_credits == 150
        assert profile.earned_credits == 150
        await store.assert_ledger_consistent(profile_id)

    @pytest.mark.parametrize("amount", [0, -5])
    async def test_non_positive_amount_writes_nothing(self, make_profile, add_credits, store, amount):
        profile_id = await make_profile("earner")

        result = await add_credits(profile_id, amount)

        assert result.is_err()
        assert result.error.code == "INVALID_AMOUNT"
        assert (await store.profile(profile_id)).current_credits == 0
        assert await store.count(CreditTransaction) == 0

    async def test_unknown_profile(self, add_credits, store):
        result = await add_credits(404, 10)

        assert result.is_err()
        assert result.error.code == "PROFILE_NOT_FOUND"
        assert await store.count(CreditTransaction) == 0

    async def test_idempotency_key_deposits_once(self, make_profile, add_credits, store):
        profile_id = await make_profile("earner")

        first = await add_credits(profile_id, 75, event_id="hackathon", idempotency_key="hackathon:earner")
        second = await add_credits(profile_id, 75, event_id="hackathon", idempotency_key="hackathon:earner")

        assert first.is_ok() and second.is_ok()
        assert first.value.transaction_id == second.value.transaction_id
        assert (await store.profile(profile_id)).current_credits == 75
        assert await store.count(CreditTransaction) == 1

    async def test_concurrent_deposits_are_all_applied(self, make_profile, add_credits, store):
        profile_id = await make_profile("popular")

        results = await asyncio.gather(*(add_credits(profile_id, 10) for _ in range(10)))

        assert all(r.is_ok() for r in results)
        assert sorted(r.value.balance_after for r in results) == list(range(10, 101, 10))
        profile = await store.profile(profile_id)
        assert profile.current_credits == 100
        assert profile.earned_credits == 100
        await store.assert_ledger_consistent(profile_id)


@pytest.mark.asyncio
class TestProfilesAndQueries:

    async def test_create_profile_is_get_or_create(self, session_factory, store):
        command = CreateProfileCommandDTO(user_id="repeat", display_name="Repeat")

        async with session_factory() as session:
            first = await CreateProfile(
                SqlAlchemyUnitOfWork(session), SqlAlchemyProfileRepository(session)
            ).execute(command)
        async with session_factory() as session:
            second = await CreateProfile(
                SqlAlchemyUnitOfWork(session), SqlAlchemyProfileRepository(session)
            ).execute(command)

        assert first.is_ok() and second.is_ok()
        assert first.value.profile_id == second.value.profile_id
        assert await store.count(Profile) == 1

    async def test_balance_and_transaction_history(self, make_profile, add_credits, session_factory):
        profile_id = await make_profile("history", credits=10)
        await add_credits(profile_id, 20, event_id="second")
        await add_credits(profile_id, 30, event_id="third")

        async with session_factory() as session:
            balance = await GetBalance(SqlAlchemyProfileRepository(session)).execute(profile_id)
            listing = await ListTransactions(
                SqlAlchemyCreditTransactionRepository(session)
            ).execute(profile_id, limit=2, offset=0)

        assert balance.is_ok()
        assert balance.value.current_credits == 60
        assert listing.is_ok()
        assert listing.value.total == 3
        assert [t.event_id for t in listing.value.transactions] == ["third", "second"]

    async def test_reconcile_flags_tampered_balance(self, make_profile, session_factory):
        clean = await make_profile("clean", credits=100)
        tampered = await make_profile("tampered", credits=100)

        async with session_factory() as session:
            profile = await session.get(Profile, tampered)
            profile.current_credits = 130
            session.add(profile)
            await session.commit()

        async with session_factory() as session:
            result = await ReconcileLedger(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyProfileRepository(session),
                SqlAlchemyCreditTransactionRepository(session),
            ).execute()

        assert result.is_ok()
        assert result.value.total_profiles_checked == 2
        assert result.value.discrepancies_found == 1
        discrepancy = result.value.discrepancies[0]
        assert discrepancy.profile_id == tampered
        assert discrepancy.calculated_balance == 100
        assert discrepancy.discrepancy == 30


@pytest.mark.asyncio
class TestStorageGuards:

    async def test_debit_never_drives_balance_negative(self, make_profile, session_factory, store):
        profile_id = await make_profile("guarded", credits=10)

        async with session_factory() as session:
            with pytest.raises(WriteConflictError):
                await SqlAlchemyProfileRepository(session).debit(profile_id, 11)
            await session.rollback()

        assert (await store.profile(profile_id)).current_credits == 10

    async def test_inventory_decrement_never_goes_negative(self, make_reward, session_factory, store):
        reward_id = await make_reward(name="Mug", quantity=1, default_cost=5)

        async with session_factory() as session:
            with pytest.raises(WriteConflictError):
                await SqlAlchemyRewardRepository(session).decrement_quantity(reward_id, 2)
            await session.rollback()

        assert (await store.reward(reward_id)).quantity == 1

    async def test_negative_balance_rejected_by_schema(self, session_factory):
        async with session_factory() as session:
            session.add(Profile(user_id="broken", current_credits=-1, earned_credits=0))
            with pytest.raises(IntegrityError):
                await session.flush()
            await session.rollback()
