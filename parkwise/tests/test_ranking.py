from __future__ import annotations

import math

import pytest

from parkwise.pricing.models import (
    Coordinates,
    DiscountQualifier,
    DiscountType,
    ParkingDiscount,
    ParkingLot,
    PricingQuery,
    RateTier,
)
from parkwise.recommendations.geo import EARTH_RADIUS_KM
from parkwise.recommendations.ranking import price_lots, rank_by_distance, rank_lots

KM_PER_DEGREE = EARTH_RADIUS_KM * math.pi / 180
ORIGIN = Coordinates(lat=13.75, lng=100.5)


def _lot(id_: str, rate: float, free_minutes: int = 0, km_north: float = 0.0, discounts=()) -> ParkingLot:
    return ParkingLot(
        id=id_,
        name=id_.title(),
        address=f"{id_} street",
        coordinates=Coordinates(lat=ORIGIN.lat + km_north / KM_PER_DEGREE, lng=ORIGIN.lng),
        free_minutes=free_minutes,
        tiers=(RateTier(id=f"{id_}-t1", from_minute=1, rate_per_hour=rate),),
        discounts=tuple(discounts),
    )


def _query(duration: int = 120, spend: float = 0.0, qualifiers=()) -> PricingQuery:
    return PricingQuery(duration_minutes=duration, spend_amount=spend, qualifiers=frozenset(qualifiers))


# ── Cost ranking ────────────────────────────────────────────────────────


def test_rank_sorts_by_total_cost():
    lots = [_lot("pricey", 60), _lot("cheap", 10), _lot("middle", 30)]
    ranked = rank_lots(lots, _query())
    assert [r.lot_id for r in ranked] == ["cheap", "middle", "pricey"]
    costs = [r.total_cost for r in ranked]
    assert costs == sorted(costs)


def test_rank_is_stable_for_equal_costs():
    lots = [_lot("b", 20), _lot("a", 20), _lot("cheap", 5), _lot("c", 20)]
    ranked = rank_lots(lots, _query())
    assert [r.lot_id for r in ranked] == ["cheap", "b", "a", "c"]


def test_rank_applies_query_discounts():
    movie = ParkingDiscount(
        id="movie",
        type=DiscountType.validation,
        description="Cinema",
        qualifier=DiscountQualifier.movie,
        additional_free_minutes=120,
    )
    lots = [_lot("plain", 10), _lot("cinema", 40, discounts=[movie])]
    assert [r.lot_id for r in rank_lots(lots, _query())] == ["plain", "cinema"]
    ranked = rank_lots(lots, _query(qualifiers=[DiscountQualifier.movie]))
    assert [r.lot_id for r in ranked] == ["cinema", "plain"]
    assert ranked[0].total_cost == 0


def test_rank_empty_catalog():
    assert rank_lots([], _query()) == []


def test_price_lots_keeps_catalog_order():
    lots = [_lot("pricey", 60), _lot("cheap", 10)]
    priced = price_lots(lots, _query())
    assert [lot.id for lot, _ in priced] == ["pricey", "cheap"]
    assert [b.lot_id for _, b in priced] == ["pricey", "cheap"]


# ── Distance ranking ────────────────────────────────────────────────────


def test_lot_just_beyond_cutoff_is_dropped():
    priced = price_lots([_lot("far", 10, km_north=10.1)], _query())
    assert rank_by_distance(priced, ORIGIN) == []


def test_lot_just_inside_cutoff_is_kept():
    priced = price_lots([_lot("near", 10, km_north=9.9)], _query())
    results = rank_by_distance(priced, ORIGIN)
    assert [r.lot.id for r in results] == ["near"]
    assert results[0].distance_km == pytest.approx(9.9)


def test_orders_by_distance():
    lots = [
        _lot("nine", 10, km_north=9.9),
        _lot("eleven", 10, km_north=10.1),
        _lot("two", 10, km_north=-2.0),
        _lot("five", 10, km_north=5.0),
    ]
    results = rank_by_distance(price_lots(lots, _query()), ORIGIN)
    assert [r.lot.id for r in results] == ["two", "five", "nine"]
    assert [r.pricing.lot_id for r in results] == ["two", "five", "nine"]
    distances = [r.distance_km for r in results]
    assert distances == sorted(distances)


def test_equal_distances_keep_input_order():
    lots = [_lot("x", 30, km_north=3.0), _lot("y", 10, km_north=3.0), _lot("z", 20, km_north=1.0)]
    results = rank_by_distance(price_lots(lots, _query()), ORIGIN)
    assert [r.lot.id for r in results] == ["z", "x", "y"]


def test_without_origin_keeps_order_and_filters_nothing():
    lots = [_lot("far", 30, km_north=50.0), _lot("near", 10, km_north=1.0)]
    results = rank_by_distance(price_lots(lots, _query()), None)
    assert [r.lot.id for r in results] == ["far", "near"]
    assert all(r.distance_km is None for r in results)


def test_custom_cutoff():
    lots = [_lot("four", 10, km_north=4.0), _lot("two", 10, km_north=2.0)]
    results = rank_by_distance(price_lots(lots, _query()), ORIGIN, max_distance_km=3.0)
    assert [r.lot.id for r in results] == ["two"]


def test_distance_ranking_serialises_camel_case():
    priced = price_lots([_lot("near", 10, km_north=1.0)], _query())
    body = rank_by_distance(priced, ORIGIN)[0].model_dump(mode="json", by_alias=True)
    assert set(body) == {"lot", "pricing", "distanceKm"}
    assert body["lot"]["freeMinutes"] == 0
    assert body["pricing"]["lotId"] == "near"
