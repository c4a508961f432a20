from __future__ import annotations

from collections.abc import Collection
from typing import NamedTuple

from .models import DiscountQualifier, DiscountType, ParkingDiscount, ParkingLot


class DiscountEvaluation(NamedTuple):
    bonus_minutes: int
    discounts_applied: list[ParkingDiscount]


def is_eligible(
    discount: ParkingDiscount,
    spend_amount: float,
    qualifiers: Collection[DiscountQualifier],
) -> bool:
    """Return whether a single discount applies.

    The discount type selects the rule. A qualifier on a purchase or
    membership discount is ignored.
    """
    if discount.type == DiscountType.purchase:
        return discount.threshold is not None and spend_amount >= discount.threshold
    if discount.type == DiscountType.validation:
        return discount.qualifier is not None and discount.qualifier in qualifiers
    if discount.type == DiscountType.membership:
        # Unconditional perk when no threshold is set.
        return discount.threshold is None or spend_amount >= discount.threshold
    return False


def evaluate_discounts(
    lot: ParkingLot,
    spend_amount: float = 0.0,
    qualifiers: Collection[DiscountQualifier] = (),
) -> DiscountEvaluation:
    """Collect every eligible discount of ``lot`` in catalog order."""
    bonus_minutes = 0
    applied: list[ParkingDiscount] = []
    for discount in lot.discounts:
        if is_eligible(discount, spend_amount, qualifiers):
            bonus_minutes += discount.additional_free_minutes
            applied.append(discount)
    return DiscountEvaluation(bonus_minutes=bonus_minutes, discounts_applied=applied)
