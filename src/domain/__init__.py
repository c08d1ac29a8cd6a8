from .base import BaseModel
from .profile import Profile
from .credit_transaction import CreditTransaction, TransactionType
from .reward import Reward
from .redemption import Redemption, RedemptionFailure
from .pricing import resolve_unit_cost

__all__ = [
    "BaseModel",
    "Profile",
    "CreditTransaction",
    "TransactionType",
    "Reward",
    "Redemption",
    "RedemptionFailure",
    "resolve_unit_cost",
]
