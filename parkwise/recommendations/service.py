from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from ..catalog.data_store import catalog_version, list_lots
from ..pricing.models import ParkingLot, PricingBreakdown, PricingQuery
from .cache import cache_get, cache_set
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import NearbyResponse, RecommendationRequest, RecommendationResponse
from .ranking import price_lots, rank_by_distance, sort_by_cost

logger = logging.getLogger(__name__)


def _priced_by_cost(
    query: PricingQuery,
    config: RankingConfig,
) -> tuple[tuple[ParkingLot, PricingBreakdown], ...]:
    lots = list_lots()
    version = catalog_version()

    if config.cache_enabled:
        cached = cache_get(query, version)
        if cached is not None:
            logger.debug("Recommendation cache hit for %s", query)
            return cached

    priced = tuple(sort_by_cost(price_lots(lots, query)))

    if config.cache_enabled:
        cache_set(query, version, priced)
    return priced


def get_recommendations(
    request: RecommendationRequest,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> RecommendationResponse:
    start_time = time.perf_counter()
    query = request.to_query()

    priced = _priced_by_cost(query, config)

    elapsed_ms = round((time.perf_counter() - start_time) * 1000, 1)
    logger.info(
        "Priced %d lots for %d minutes in %.1f ms",
        len(priced), query.duration_minutes, elapsed_ms,
    )
    return RecommendationResponse(
        requested_duration_minutes=query.duration_minutes,
        recommendations=[breakdown for _, breakdown in priced],
        generated_at=datetime.now(timezone.utc),
    )


def get_nearby(
    request: RecommendationRequest,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> NearbyResponse:
    """Cost-ranked lots re-ordered by distance from the request origin."""
    query = request.to_query()
    origin = request.origin

    results = rank_by_distance(
        _priced_by_cost(query, config),
        origin,
        max_distance_km=config.max_distance_km,
        radius_km=config.earth_radius_km,
    )

    if origin is None:
        logger.info("No origin given, returning %d lots in cost order", len(results))
    else:
        logger.info(
            "%d lots within %.1f km of (%.4f, %.4f)",
            len(results), config.max_distance_km, origin.lat, origin.lng,
        )
    return NearbyResponse(
        requested_duration_minutes=query.duration_minutes,
        origin=origin,
        results=results,
        generated_at=datetime.now(timezone.utc),
    )
