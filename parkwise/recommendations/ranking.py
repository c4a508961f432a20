"""
Ranking of priced parking lots.

Two orderings are offered:

- ``rank_lots`` is the primary recommendation order: cheapest first, with
  equal-cost lots kept in catalog order.
- ``rank_by_distance`` is the map ordering: lots beyond the distance cutoff
  from an origin are dropped and the rest are ordered nearest first.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..pricing.engine import price_query
from ..pricing.models import Coordinates, ParkingLot, PricingBreakdown, PricingQuery
from .config import DEFAULT_RANKING_CONFIG
from .geo import haversine_km_many
from .models import RankedResult


def price_lots(lots: Iterable[ParkingLot], query: PricingQuery) -> list[tuple[ParkingLot, PricingBreakdown]]:
    """Price every lot, keeping catalog order."""
    return [(lot, price_query(lot, query)) for lot in lots]


def sort_by_cost(
    priced: Iterable[tuple[ParkingLot, PricingBreakdown]],
) -> list[tuple[ParkingLot, PricingBreakdown]]:
    # sorted() is stable, so ties keep catalog order.
    return sorted(priced, key=lambda pair: pair[1].total_cost)


def rank_lots(lots: Iterable[ParkingLot], query: PricingQuery) -> list[PricingBreakdown]:
    return [breakdown for _, breakdown in sort_by_cost(price_lots(lots, query))]


def rank_by_distance(
    priced: Sequence[tuple[ParkingLot, PricingBreakdown]],
    origin: Coordinates | None,
    max_distance_km: float = DEFAULT_RANKING_CONFIG.max_distance_km,
    radius_km: float = DEFAULT_RANKING_CONFIG.earth_radius_km,
) -> list[RankedResult]:
    """
    Attach distances from ``origin`` and order results nearest first.

    Without an origin no distance is known, nothing is filtered and the
    incoming order is kept. Entries farther than ``max_distance_km`` are
    dropped; entries without a distance sort after those with one.
    """
    if origin is None:
        distances: list[float | None] = [None] * len(priced)
    else:
        points = [(lot.coordinates.lat, lot.coordinates.lng) for lot, _ in priced]
        computed = haversine_km_many((origin.lat, origin.lng), points, radius_km)
        distances = [float(d) for d in computed]

    results = [
        RankedResult(lot=lot, pricing=breakdown, distance_km=distance)
        for (lot, breakdown), distance in zip(priced, distances)
        if distance is None or distance <= max_distance_km
    ]
    results.sort(key=lambda r: (r.distance_km is None, r.distance_km or 0.0))
    return results
