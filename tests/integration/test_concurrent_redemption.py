"""Concurrency tests: independent sessions racing for the same rows

Each task opens its own session, so the database lock (BEGIN IMMEDIATE on
SQLite, FOR UPDATE elsewhere) is the only thing serializing them.
"""

import asyncio

import pytest

from src.domain.redemption import Redemption, RedemptionFailure


def codes(results):
    return sorted("ok" if r.is_ok() else r.error.code for r in results)


@pytest.mark.asyncio
class TestConcurrentRedemption:

    async def test_last_unit_has_exactly_one_winner(self, make_profile, make_reward, redeem, store):
        """Two profiles race for the last unit"""
        first = await make_profile("racer-1", credits=200)
        second = await make_profile("racer-2", credits=200)
        reward_id = await make_reward(name="Signed jersey", quantity=1, default_cost=100)

        results = await asyncio.gather(redeem(reward_id, first), redeem(reward_id, second))

        assert codes(results) == ["ok", RedemptionFailure.UNAVAILABLE.value]
        assert (await store.reward(reward_id)).quantity == 0
        assert await store.count(Redemption) == 1

        balances = sorted([
            (await store.profile(first)).current_credits,
            (await store.profile(second)).current_credits,
        ])
        assert balances == [100, 200]
        await store.assert_ledger_consistent(first)
        await store.assert_ledger_consistent(second)

    async def test_many_racers_never_oversell(self, make_profile, make_reward, redeem, store):
        stock = 3
        profiles = [await make_profile(f"crowd-{i}", credits=100) for i in range(8)]
        reward_id = await make_reward(name="Tote bag", quantity=stock, default_cost=100)

        results = await asyncio.gather(*(redeem(reward_id, p) for p in profiles))

        winners = [r for r in results if r.is_ok()]
        losers = [r for r in results if r.is_err()]
        assert len(winners) == stock
        assert all(r.error.code == RedemptionFailure.UNAVAILABLE.value for r in losers)
        assert (await store.reward(reward_id)).quantity == 0
        assert await store.count(Redemption) == stock
        assert sorted(r.value.remaining_quantity for r in winners) == [0, 1, 2]

        for profile_id in profiles:
            await store.assert_ledger_consistent(profile_id)

    async def test_last_credits_have_exactly_one_winner(self, make_profile, make_reward, redeem, store):
        """One profile with credits for a single unit redeems from five places at once"""
        profile_id = await make_profile("spender", credits=300)
        reward_id = await make_reward(name="Headphones", quantity=10, default_cost=300)

        results = await asyncio.gather(*(redeem(reward_id, profile_id) for _ in range(5)))

        assert codes(results) == sorted(["ok"] + [RedemptionFailure.INSUFFICIENT.value] * 4)
        assert (await store.profile(profile_id)).current_credits == 0
        assert (await store.reward(reward_id)).quantity == 9
        assert await store.count(Redemption) == 1
        await store.assert_ledger_consistent(profile_id)

    async def test_disjoint_redemptions_all_succeed(self, make_profile, make_reward, redeem, store):
        """Plenty of stock and credits: serialization must not turn into failures"""
        profiles = [await make_profile(f"fan-{i}", credits=50) for i in range(5)]
        reward_id = await make_reward(name="Pin", quantity=5, default_cost=50)

        results = await asyncio.gather(*(redeem(reward_id, p) for p in profiles))

        assert all(r.is_ok() for r in results)
        assert (await store.reward(reward_id)).quantity == 0
        for profile_id in profiles:
            assert (await store.profile(profile_id)).current_credits == 0
            await store.assert_ledger_consistent(profile_id)

    async def test_deposits_and_redemptions_interleave_consistently(
        self, make_profile, make_reward, redeem, add_credits, store
    ):
        profile_id = await make_profile("mixed", credits=100)
        reward_id = await make_reward(name="Cap", quantity=10, default_cost=40)

        results = await asyncio.gather(
            *(add_credits(profile_id, 20, event_id=f"event-{i}") for i in range(5)),
            *(redeem(reward_id, profile_id) for _ in range(5)),
        )

        deposits, redemptions = results[:5], results[5:]
        assert all(r.is_ok() for r in deposits)
        redeemed = sum(1 for r in redemptions if r.is_ok())

        profile = await store.profile(profile_id)
        assert profile.earned_credits == 200
        assert profile.current_credits == 200 - 40 * redeemed
        assert (await store.reward(reward_id)).quantity == 10 - redeemed
        await store.assert_ledger_consistent(profile_id)
