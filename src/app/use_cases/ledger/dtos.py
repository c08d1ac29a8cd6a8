"""Data Transfer Objects for Ledger Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CreateProfileCommandDTO(BaseModel):
    """
    Command DTO for opening a profile

    Used as input to CreateProfile use case.
    """

    user_id: str = Field(
        ...,
        min_length=1,
        description="Owning user identifier (already authenticated by the caller)"
    )

    display_name: str = Field(
        default="",
        max_length=255,
        description="Name shown on the leaderboard"
    )


class ProfileResponseDTO(BaseModel):
    profile_id: int
    user_id: str
    display_name: str
    current_credits: int
    earned_credits: int
    created_at: datetime


class AddCreditsCommandDTO(BaseModel):
    """
    Command DTO for issuing credits

    Used as input to AddCredits use case. amount is checked by the use case
    so a non-positive value comes back as INVALID_AMOUNT rather than a
    validation exception.
    """

    profile_id: int = Field(
        ...,
        description="Profile to credit"
    )

    amount: int = Field(
        ...,
        description="Credits to add (must be > 0)"
    )

    event_id: Optional[str] = Field(
        default=None,
        description="Completed event the credits are issued for"
    )

    idempotency_key: Optional[str] = Field(
        default=None,
        min_length=1,
        description="Optional key; replays return the original transaction"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "profile_id": 42,
                "amount": 150,
                "event_id": "hackathon_2024",
                "idempotency_key": "hackathon_2024:42",
            }
        }
    )


class CreditTransactionResponseDTO(BaseModel):
    """
    Response DTO for credit issuance

    Returned by AddCredits.
    """

    transaction_id: int = Field(
        ...,
        description="Transaction ID"
    )

    profile_id: int = Field(
        ...,
        description="Profile identifier"
    )

    transaction_type: str = Field(
        ...,
        description="Type of transaction (earn, redeem)"
    )

    amount: int = Field(
        ...,
        description="Signed credit amount"
    )

    balance_after: int = Field(
        ...,
        description="current_credits after the transaction"
    )

    event_id: Optional[str] = Field(
        default=None,
        description="Originating event"
    )

    idempotency_key: Optional[str] = Field(
        default=None,
        description="Idempotency key"
    )

    created_at: datetime = Field(
        ...,
        description="Transaction timestamp"
    )


class BalanceResponseDTO(BaseModel):
    """
    Response DTO for get balance operation

    Returned by GetBalance use case.
    """

    profile_id: int
    current_credits: int
    earned_credits: int
    last_updated: datetime


class TransactionDTO(BaseModel):
    id: int
    transaction_type: str
    amount: int
    balance_after: int
    event_id: Optional[str] = None
    created_at: datetime


class ListTransactionsResponseDTO(BaseModel):
    transactions: List[TransactionDTO]
    total: int
    limit: int
    offset: int


class LeaderboardEntryDTO(BaseModel):
    rank: int = Field(..., ge=1, description="1-based position")
    profile_id: int
    display_name: str
    earned_credits: int
    current_credits: int


class LeaderboardResponseDTO(BaseModel):
    entries: List[LeaderboardEntryDTO]
    limit: int


class LedgerDiscrepancyDTO(BaseModel):
    """A profile whose cached balance disagrees with its transaction log"""

    profile_id: int
    user_id: str
    current_credits: int
    calculated_balance: int
    discrepancy: int


class ReconciliationResultDTO(BaseModel):
    total_profiles_checked: int
    discrepancies_found: int
    discrepancies: List[LedgerDiscrepancyDTO]
    reconciliation_time: datetime
    execution_time_ms: int
