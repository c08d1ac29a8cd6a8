"""Unit cost resolution for rewards"""

from typing import Optional


def resolve_unit_cost(default_cost: int, discount_cost: Optional[int] = None) -> int:
    """
    Effective per-item price of a reward

    The discount price wins when it is set and positive. A missing or zero
    discount means no discount applies.
    """
    if discount_cost is not None and discount_cost > 0:
        return discount_cost
    return default_cost
