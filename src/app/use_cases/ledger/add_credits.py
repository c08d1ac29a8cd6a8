"""AddCredits Use Case

Issues credits to a profile for a completed event. The balance update and
the ledger entry commit together or not at all.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.profile_repository import ProfileRepository
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.domain.credit_transaction import CreditTransaction, TransactionType
from .dtos import AddCreditsCommandDTO, CreditTransactionResponseDTO

logger = logging.getLogger(__name__)


class AddCredits:
    """
    Use Case: Deposit credits into a profile

    Business Rules:
    1. amount must be a positive integer (INVALID_AMOUNT otherwise, nothing written)
    2. earned_credits and current_credits both grow by amount
    3. Atomic updates: balance and EARN transaction created in single transaction
    4. Pessimistic locking: SELECT FOR UPDATE keeps balance_after exact
    5. Idempotency: a repeated idempotency_key returns the original transaction

    Flow:
    1. Validate amount
    2. Check idempotency (return existing if found)
    3. Get profile with lock (SELECT FOR UPDATE)
    4. Create EARN transaction record
    5. Increment profile balances
    6. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        profile_repo: ProfileRepository,
        transaction_repo: CreditTransactionRepository,
    ):
        self.uow = uow
        self.profile_repo = profile_repo
        self.transaction_repo = transaction_repo

    async def execute(self, command: AddCreditsCommandDTO) -> Result[CreditTransactionResponseDTO]:
        if command.amount <= 0:
            return Return.err(
                Error(
                    code="INVALID_AMOUNT",
                    message=f"Credit amount must be a positive integer, got {command.amount}",
                )
            )

        try:
            if command.idempotency_key:
                existing_transaction = await self.transaction_repo.get_by_idempotency_key(
                    command.idempotency_key
                )
                if existing_transaction:
                    response = self._to_response_dto(existing_transaction)
                    await self.uow.rollback()
                    return Return.ok(response)

            profile = await self.profile_repo.get_by_id(command.profile_id, for_update=True)

            if not profile:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="PROFILE_NOT_FOUND",
                        message=f"Profile {command.profile_id} not found",
                    )
                )

            balance_after = profile.current_credits + command.amount

            transaction = CreditTransaction(
                profile_id=profile.id,
                event_id=command.event_id,
                transaction_type=TransactionType.EARN,
                amount=command.amount,
                balance_after=balance_after,
                idempotency_key=command.idempotency_key,
            )
            created_transaction = await self.transaction_repo.create(transaction)

            await self.profile_repo.credit(profile.id, command.amount)

            await self.uow.commit()

            logger.info(
                f"Credited {command.amount} to profile {profile.id} "
                f"(event={command.event_id}, balance={balance_after})"
            )
            return Return.ok(self._to_response_dto(created_transaction))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Adding credits to profile {command.profile_id} failed: {e}")
            return Return.err(
                Error(
                    code="ADD_CREDITS_FAILED",
                    message="Failed to add credits",
                    reason=str(e),
                )
            )

    def _to_response_dto(self, transaction: CreditTransaction) -> CreditTransactionResponseDTO:
        return CreditTransactionResponseDTO(
            transaction_id=transaction.id,
            profile_id=transaction.profile_id,
            transaction_type=TransactionType(transaction.transaction_type).value,
            amount=transaction.amount,
            balance_after=transaction.balance_after,
            event_id=transaction.event_id,
            idempotency_key=transaction.idempotency_key,
            created_at=transaction.created_at,
        )
