"""Ledger use cases: profiles, credit issuance, balances, leaderboard"""
from .create_profile import CreateProfile
from .add_credits import AddCredits
from .get_balance import GetBalance
from .list_transactions import ListTransactions
from .get_leaderboard import GetLeaderboard
from .reconcile_ledger import ReconcileLedger
from .dtos import (
    CreateProfileCommandDTO,
    ProfileResponseDTO,
    AddCreditsCommandDTO,
    CreditTransactionResponseDTO,
    BalanceResponseDTO,
    TransactionDTO,
    ListTransactionsResponseDTO,
    LeaderboardEntryDTO,
    LeaderboardResponseDTO,
    LedgerDiscrepancyDTO,
    ReconciliationResultDTO,
)

__all__ = [
    "CreateProfile",
    "AddCredits",
    "GetBalance",
    "ListTransactions",
    "GetLeaderboard",
    "ReconcileLedger",
    "CreateProfileCommandDTO",
    "ProfileResponseDTO",
    "AddCreditsCommandDTO",
    "CreditTransactionResponseDTO",
    "BalanceResponseDTO",
    "TransactionDTO",
    "ListTransactionsResponseDTO",
    "LeaderboardEntryDTO",
    "LeaderboardResponseDTO",
    "LedgerDiscrepancyDTO",
    "ReconciliationResultDTO",
]
