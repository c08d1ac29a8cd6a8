"""ReconcileLedger Use Case

Checks every profile's cached balance against its transaction log.
"""

import logging
import time
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.profile_repository import ProfileRepository
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.domain.base import utc_now
from .dtos import LedgerDiscrepancyDTO, ReconciliationResultDTO

logger = logging.getLogger(__name__)


class ReconcileLedger:
    """
    Use Case: Reconcile profile balances against transactions

    Business Rules:
    1. The transaction log is the source of truth
    2. For each profile, current_credits must equal the sum of its transaction amounts
    3. Mismatches are reported and logged, never corrected
    4. Does NOT modify any data (read-only reconciliation)
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

    async def execute(self) -> Result[ReconciliationResultDTO]:
        start_time = time.time()
        reconciliation_time = utc_now()

        try:
            logger.info("Starting credit ledger reconciliation")

            profiles = await self.profile_repo.get_all()
            total_profiles = len(profiles)

            logger.info(f"Found {total_profiles} profiles to reconcile")

            discrepancies: list[LedgerDiscrepancyDTO] = []

            for profile in profiles:
                transaction_sum = await self.transaction_repo.get_transaction_sum_by_profile(
                    profile.id
                )

                if profile.current_credits != transaction_sum:
                    discrepancy_amount = profile.current_credits - transaction_sum

                    discrepancies.append(
                        LedgerDiscrepancyDTO(
                            profile_id=profile.id,
                            user_id=profile.user_id,
                            current_credits=profile.current_credits,
                            calculated_balance=transaction_sum,
                            discrepancy=discrepancy_amount,
                        )
                    )

                    logger.warning(
                        f"Discrepancy found for profile {profile.id} "
                        f"(user={profile.user_id}): "
                        f"current_credits={profile.current_credits}, "
                        f"transaction_sum={transaction_sum}, "
                        f"discrepancy={discrepancy_amount}"
                    )

            # Nothing was written; release the read transaction
            await self.uow.rollback()

            execution_time_ms = int((time.time() - start_time) * 1000)

            response = ReconciliationResultDTO(
                total_profiles_checked=total_profiles,
                discrepancies_found=len(discrepancies),
                discrepancies=discrepancies,
                reconciliation_time=reconciliation_time,
                execution_time_ms=execution_time_ms,
            )

            if discrepancies:
                logger.warning(
                    f"Reconciliation complete. Found {len(discrepancies)} discrepancies "
                    f"out of {total_profiles} profiles in {execution_time_ms}ms"
                )
            else:
                logger.info(
                    f"Reconciliation complete. All {total_profiles} profiles balanced "
                    f"in {execution_time_ms}ms"
                )

            return Return.ok(response)

        except Exception as e:
            logger.error(f"Ledger reconciliation failed: {e}")
            return Return.err(
                Error(
                    code="RECONCILIATION_FAILED",
                    message="Failed to reconcile credit ledger",
                    reason=str(e),
                )
            )
