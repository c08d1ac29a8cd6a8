from .profile_repository import ProfileRepository
from .credit_transaction_repository import CreditTransactionRepository
from .reward_repository import RewardRepository
from .redemption_repository import RedemptionRepository

__all__ = [
    "ProfileRepository",
    "CreditTransactionRepository",
    "RewardRepository",
    "RedemptionRepository",
]
