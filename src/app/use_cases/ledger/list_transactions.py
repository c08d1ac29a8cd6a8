"""
List Transactions Use Case

Retrieves the credit transaction history of a profile with pagination.
"""
from libs.result import Result, Return
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.domain.credit_transaction import TransactionType
from .dtos import ListTransactionsResponseDTO, TransactionDTO


class ListTransactions:
    """
    Use case: View credit transactions

    Transactions are ordered by created_at DESC (most recent first).
    """

    def __init__(self, transaction_repo: CreditTransactionRepository):
        self.transaction_repo = transaction_repo

    async def execute(
        self, profile_id: int, limit: int = 20, offset: int = 0
    ) -> Result[ListTransactionsResponseDTO]:
        """
        List transactions for a profile with pagination.

        Args:
            profile_id: Profile identifier
            limit: Maximum number of transactions to return (default 20)
            offset: Number of transactions to skip (default 0)
        """
        transactions, total = await self.transaction_repo.get_by_profile_id(
            profile_id=profile_id,
            limit=limit,
            offset=offset,
        )

        transaction_dtos = [
            TransactionDTO(
                id=txn.id,
                transaction_type=TransactionType(txn.transaction_type).value,
                amount=txn.amount,
                balance_after=txn.balance_after,
                event_id=txn.event_id,
                created_at=txn.created_at,
            )
            for txn in transactions
        ]

        return Return.ok(
            ListTransactionsResponseDTO(
                transactions=transaction_dtos,
                total=total,
                limit=limit,
                offset=offset,
            )
        )
