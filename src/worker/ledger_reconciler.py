"""Ledger Reconciliation Background Worker

Compares every profile's cached current_credits with the sum of its
credit transactions, on a schedule or as a one-off audit.

    python -m src.worker.ledger_reconciler --once
    python -m src.worker.ledger_reconciler --interval 3600
"""

import argparse
import asyncio
import logging
from typing import Optional
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.depends import build_engine
from src.adapter.repositories.profile_repository import SqlAlchemyProfileRepository
from src.adapter.repositories.credit_transaction_repository import SqlAlchemyCreditTransactionRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.ledger import ReconcileLedger, ReconciliationResultDTO
from src.domain.base import utc_now

logger = logging.getLogger(__name__)


class LedgerReconcilerWorker:
    """
    Owns its own engine so it can run beside the request path or alone.

    A run with discrepancies still succeeds; the mismatches are logged at
    ERROR for whoever watches the logs. Only a failed audit raises.
    """

    def __init__(self, db_uri: Optional[str] = None):
        self.db_uri = db_uri or ApplicationConfig.DB_URI

        self.engine = build_engine(self.db_uri)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    async def run_once(self) -> ReconciliationResultDTO:
        """
        Audit all profiles once

        Raises:
            RuntimeError: If the audit itself could not complete
        """
        if not ApplicationConfig.RECONCILIATION_ENABLED:
            logger.info("Ledger reconciliation disabled (RECONCILIATION_ENABLED=false)")
            return ReconciliationResultDTO(
                total_profiles_checked=0,
                discrepancies_found=0,
                discrepancies=[],
                reconciliation_time=utc_now(),
                execution_time_ms=0,
            )

        async with self.async_session_factory() as session:
            result = await ReconcileLedger(
                uow=SqlAlchemyUnitOfWork(session),
                profile_repo=SqlAlchemyProfileRepository(session),
                transaction_repo=SqlAlchemyCreditTransactionRepository(session),
            ).execute()

        if result.is_err():
            raise RuntimeError(f"Reconciliation failed: {result.error.message}")

        self._report(result.value)
        return result.value

    def _report(self, audit: ReconciliationResultDTO) -> None:
        if not audit.discrepancies:
            return

        logger.error(
            f"{audit.discrepancies_found} of {audit.total_profiles_checked} profiles "
            f"disagree with their credit transactions"
        )
        for d in audit.discrepancies:
            logger.error(
                f"  profile={d.profile_id} user={d.user_id} cached={d.current_credits} "
                f"ledger={d.calculated_balance} drift={d.discrepancy:+d}"
            )

    async def run_forever(self, interval_seconds: Optional[int] = None):
        interval_seconds = interval_seconds or ApplicationConfig.RECONCILIATION_INTERVAL_SECONDS
        logger.info(f"Reconciling the credit ledger every {interval_seconds}s")

        while True:
            try:
                await self.run_once()
            except RuntimeError as e:
                # Keep the schedule; the next cycle may succeed
                logger.error(str(e))

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        await self.engine.dispose()
        logger.info("Ledger reconciler stopped")


def _print_summary(audit: ReconciliationResultDTO) -> None:
    print(
        f"Checked {audit.total_profiles_checked} profiles in {audit.execution_time_ms}ms, "
        f"{audit.discrepancies_found} discrepancies"
    )
    for d in audit.discrepancies:
        print(
            f"  profile {d.profile_id} ({d.user_id}): "
            f"cached={d.current_credits} ledger={d.calculated_balance} drift={d.discrepancy:+d}"
        )


async def main(argv=None):
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Credit ledger reconciliation worker")
    parser.add_argument("--once", action="store_true", help="Audit once and exit")
    parser.add_argument(
        "--interval", type=int, default=None,
        help="Seconds between audits (default: RECONCILIATION_INTERVAL_SECONDS)",
    )
    args = parser.parse_args(argv)

    worker = LedgerReconcilerWorker()

    try:
        if args.once:
            _print_summary(await worker.run_once())
        else:
            await worker.run_forever(interval_seconds=args.interval)
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
