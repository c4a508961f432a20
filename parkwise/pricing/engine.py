from __future__ import annotations

from collections.abc import Collection
from decimal import ROUND_HALF_UP, Decimal

from ..errors import InvalidInput
from .discounts import evaluate_discounts
from .models import DiscountQualifier, ParkingLot, PricingBreakdown, PricingQuery
from .tiers import compute_tier_cost

_CENTS = Decimal("0.01")


def round_currency(value: float) -> float:
    """Round to cents, half-up on the exact binary value of ``value``."""
    return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def _check_inputs(duration_minutes: object, spend_amount: object) -> None:
    if (
        isinstance(duration_minutes, bool)
        or not isinstance(duration_minutes, int)
        or duration_minutes <= 0
    ):
        raise InvalidInput(
            f"durationMinutes must be a positive integer, got {duration_minutes!r}"
        )
    if (
        isinstance(spend_amount, bool)
        or not isinstance(spend_amount, (int, float))
        or spend_amount < 0
    ):
        raise InvalidInput(
            f"spendAmount must be a non-negative number, got {spend_amount!r}"
        )


def price_lot(
    lot: ParkingLot,
    duration_minutes: int,
    spend_amount: float = 0.0,
    qualifiers: Collection[DiscountQualifier] = (),
) -> PricingBreakdown:
    """
    Compute the full cost breakdown of parking at ``lot`` for ``duration_minutes``.

    Free minutes are the lot allowance plus every eligible discount bonus;
    whatever remains is billed against the rate tiers.
    """
    _check_inputs(duration_minutes, spend_amount)

    evaluation = evaluate_discounts(lot, spend_amount, qualifiers)
    effective_free = lot.free_minutes + evaluation.bonus_minutes
    effective_paid = max(duration_minutes - effective_free, 0)
    tier_cost = compute_tier_cost(lot, effective_paid)

    return PricingBreakdown(
        lot_id=lot.id,
        lot_name=lot.name,
        base_minutes_charged=duration_minutes,
        effective_free_minutes=effective_free,
        effective_paid_minutes=effective_paid,
        total_cost=round_currency(tier_cost.cost),
        discounts_applied=evaluation.discounts_applied,
        hourly_rate_after_free=tier_cost.last_rate,
    )


def price_query(lot: ParkingLot, query: PricingQuery) -> PricingBreakdown:
    return price_lot(
        lot,
        query.duration_minutes,
        spend_amount=query.spend_amount,
        qualifiers=query.qualifiers,
    )
