"""Credit Transaction Domain Entity

Immutable append-only audit trail of all credit mutations.
The sum of a profile's transaction amounts is its current balance.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, String
from src.domain.base import BaseModel, IdType, TimestampType, utc_now


class TransactionType(str, Enum):
    """Credit transaction types"""
    EARN = "earn"        # Credits issued for a completed event
    REDEEM = "redeem"    # Credits spent on a reward


class CreditTransaction(BaseModel, table=True):
    """
    Credit Transaction - Immutable audit trail of credit mutations

    Domain Rules:
    - Transactions are immutable (append-only)
    - amount is signed: positive = credit, negative = debit
    - EARN transactions may reference the originating event
    - REDEEM transactions carry no event reference
    - idempotency_key, when present, must be unique (prevents double-crediting)
    """

    __tablename__ = "credit_transactions"
    __table_args__ = (
        Index('ix_credit_transactions_profile_created', 'profile_id', 'created_at'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique transaction identifier (auto-increment)"
    )

    profile_id: int = Field(
        sa_column=Column(IdType, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Profile"
    )

    event_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Originating event (None for redemptions)"
    )

    transaction_type: TransactionType = Field(
        description="Type of transaction (earn, redeem)"
    )

    amount: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Signed credit amount"
    )

    balance_after: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Profile balance right after this transaction"
    )

    idempotency_key: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True, unique=True, index=True),
        description="Unique key for idempotent credit issuance"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=TimestampType,
        description="Transaction timestamp (immutable)"
    )
