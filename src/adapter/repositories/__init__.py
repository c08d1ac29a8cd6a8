from .profile_repository import SqlAlchemyProfileRepository
from .credit_transaction_repository import SqlAlchemyCreditTransactionRepository
from .reward_repository import SqlAlchemyRewardRepository
from .redemption_repository import SqlAlchemyRedemptionRepository

__all__ = [
    "SqlAlchemyProfileRepository",
    "SqlAlchemyCreditTransactionRepository",
    "SqlAlchemyRewardRepository",
    "SqlAlchemyRedemptionRepository",
]
