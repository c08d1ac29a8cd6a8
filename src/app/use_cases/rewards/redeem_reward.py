"""RedeemReward Use Case

Exchanges credits for reward inventory as a single atomic unit of work
touching the reward, the profile and the ledger.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from config import ApplicationConfig
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.profile_repository import ProfileRepository
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.app.repositories.reward_repository import RewardRepository
from src.app.repositories.redemption_repository import RedemptionRepository
from src.domain.credit_transaction import CreditTransaction, TransactionType
from src.domain.redemption import Redemption, RedemptionFailure
from .dtos import RedeemCommandDTO, RedemptionResponseDTO

logger = logging.getLogger(__name__)


class RedeemReward:
    """
    Use Case: Redeem a reward with profile credits

    Business Rules:
    1. quantity must be >= 1 (invalid_quantity, checked before any read)
    2. Reward must exist with enough inventory (unavailable)
    3. Profile must hold at least unit_cost * quantity credits (insufficient)
    4. unavailable takes precedence over insufficient
    5. Inventory, balance, REDEEM transaction and Redemption commit together
    6. Any other failure rolls everything back and reports unknown

    Flow:
    1. Validate quantity
    2. Get reward with lock (SELECT FOR UPDATE), check inventory
    3. Resolve unit cost, compute total cost
    4. Get profile with lock (SELECT FOR UPDATE), check balance
    5. Decrement reward inventory
    6. Create REDEEM transaction (amount = -total_cost)
    7. Decrement profile balance
    8. Create Redemption record
    9. Commit transaction

    Locks are always taken reward first, then profile. A write conflict
    (guarded UPDATE that matched no row, lock timeout, serialization
    failure) reruns the whole flow, up to max_attempts.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        reward_repo: RewardRepository,
        profile_repo: ProfileRepository,
        transaction_repo: CreditTransactionRepository,
        redemption_repo: RedemptionRepository,
        max_attempts: Optional[int] = None,
    ):
        self.uow = uow
        self.reward_repo = reward_repo
        self.profile_repo = profile_repo
        self.transaction_repo = transaction_repo
        self.redemption_repo = redemption_repo
        if max_attempts is None:
            max_attempts = ApplicationConfig.REDEMPTION_MAX_ATTEMPTS
        self.max_attempts = max_attempts

    async def execute(self, command: RedeemCommandDTO) -> Result[RedemptionResponseDTO]:
        if command.quantity < 1:
            return self._failure(
                RedemptionFailure.INVALID_QUANTITY,
                f"Quantity must be at least 1, got {command.quantity}",
            )

        attempt = 0
        while True:
            attempt += 1
            try:
                return await self._redeem(command)
            except Exception as e:
                await self.uow.rollback()

                if attempt < self.max_attempts and self.uow.is_retryable(e):
                    logger.warning(
                        f"Redemption of reward {command.reward_id} by profile {command.profile_id} "
                        f"hit a write conflict (attempt {attempt}/{self.max_attempts}), retrying: {e}"
                    )
                    continue

                logger.error(
                    f"Redemption of reward {command.reward_id} by profile {command.profile_id} "
                    f"failed after {attempt} attempt(s): {e}"
                )
                return self._failure(
                    RedemptionFailure.UNKNOWN,
                    "Failed to redeem reward",
                    reason=str(e),
                )

    async def _redeem(self, command: RedeemCommandDTO) -> Result[RedemptionResponseDTO]:
        reward = await self.reward_repo.get_by_id(command.reward_id, for_update=True)

        # Rollback expires loaded entities: capture what the result needs first
        if not reward or reward.quantity < command.quantity:
            available = reward.quantity if reward else 0
            await self.uow.rollback()
            return self._failure(
                RedemptionFailure.UNAVAILABLE,
                f"Reward {command.reward_id} is unavailable",
                reason=f"requested={command.quantity}, available={available}",
            )

        unit_cost = reward.unit_cost
        total_cost = unit_cost * command.quantity

        profile = await self.profile_repo.get_by_id(command.profile_id, for_update=True)

        if not profile:
            await self.uow.rollback()
            return self._failure(
                RedemptionFailure.UNKNOWN,
                f"Profile {command.profile_id} not found",
            )

        if profile.current_credits < total_cost:
            balance = profile.current_credits
            await self.uow.rollback()
            return self._failure(
                RedemptionFailure.INSUFFICIENT,
                f"Insufficient credits. Required: {total_cost}, Available: {balance}",
                reason=f"balance={balance}, required={total_cost}",
            )

        balance_after = profile.current_credits - total_cost
        remaining_quantity = reward.quantity - command.quantity

        await self.reward_repo.decrement_quantity(reward.id, command.quantity)

        transaction = await self.transaction_repo.create(
            CreditTransaction(
                profile_id=profile.id,
                event_id=None,
                transaction_type=TransactionType.REDEEM,
                amount=-total_cost,
                balance_after=balance_after,
            )
        )

        await self.profile_repo.debit(profile.id, total_cost)

        redemption = await self.redemption_repo.create(
            Redemption(
                user_id=profile.user_id,
                profile_id=profile.id,
                reward_id=reward.id,
                transaction_id=transaction.id,
                quantity=command.quantity,
                unit_cost=unit_cost,
                total_cost=total_cost,
            )
        )

        await self.uow.commit()

        logger.info(
            f"Profile {profile.id} redeemed {command.quantity} x reward {reward.id} "
            f"for {total_cost} credits (balance={balance_after}, stock={remaining_quantity})"
        )

        return Return.ok(
            RedemptionResponseDTO(
                redemption_id=redemption.id,
                reward_id=reward.id,
                profile_id=profile.id,
                transaction_id=transaction.id,
                quantity=command.quantity,
                unit_cost=unit_cost,
                total_cost=total_cost,
                balance_after=balance_after,
                remaining_quantity=remaining_quantity,
                redeemed_at=redemption.redeemed_at,
            )
        )

    def _failure(
        self, failure: RedemptionFailure, message: str, reason: Optional[str] = None
    ) -> Result[RedemptionResponseDTO]:
        return Return.err(Error(code=failure.value, message=message, reason=reason))
