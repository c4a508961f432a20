from __future__ import annotations

from typing import NamedTuple

from ..errors import CalculationError
from .models import ParkingLot


class TierCost(NamedTuple):
    cost: float
    last_rate: float


def compute_tier_cost(lot: ParkingLot, paid_minutes: int) -> TierCost:
    """
    Bill ``paid_minutes`` against the lot's rate tiers.

    Tiers are walked in catalog order. A bounded tier absorbs at most
    ``to_minute - from_minute + 1`` minutes; an unbounded tier absorbs the
    rest. Cost is prorated per minute and left unrounded.
    """
    if paid_minutes <= 0:
        return TierCost(cost=0.0, last_rate=0.0)

    remaining = paid_minutes
    total = 0.0
    last_rate = 0.0

    for tier in lot.tiers:
        if remaining <= 0:
            break

        if tier.to_minute is not None:
            capacity = tier.to_minute - tier.from_minute + 1
            consumed = min(remaining, capacity)
            total += (consumed / 60) * tier.rate_per_hour
            remaining -= consumed
        else:
            total += (remaining / 60) * tier.rate_per_hour
            remaining = 0
        last_rate = tier.rate_per_hour

    return TierCost(cost=max(total, 0.0), last_rate=last_rate)


def validate_tiers(lot: ParkingLot) -> None:
    """Raise ``CalculationError`` if the lot's tiers are not ordered and contiguous."""
    previous = None
    for index, tier in enumerate(lot.tiers):
        if tier.to_minute is not None and tier.to_minute < tier.from_minute:
            raise CalculationError(
                f"Lot {lot.id}: tier {tier.id} ends ({tier.to_minute}) "
                f"before it starts ({tier.from_minute})"
            )
        if tier.to_minute is None and index != len(lot.tiers) - 1:
            raise CalculationError(
                f"Lot {lot.id}: unbounded tier {tier.id} must be the last tier"
            )
        if previous is not None and tier.from_minute != previous.to_minute + 1:
            raise CalculationError(
                f"Lot {lot.id}: tier {tier.id} starts at {tier.from_minute}, "
                f"expected {previous.to_minute + 1}"
            )
        previous = tier
