from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys, exposes snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CatalogModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class DiscountType(str, Enum):
    purchase = "purchase"
    validation = "validation"
    membership = "membership"


class DiscountQualifier(str, Enum):
    movie = "movie"
    dining = "dining"
    grocery = "grocery"
    membership = "membership"
    other = "other"


class Coordinates(CatalogModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class RateTier(CatalogModel):
    id: str
    from_minute: int = Field(..., ge=0)
    to_minute: int | None = None
    rate_per_hour: float = Field(..., ge=0.0)


class ParkingDiscount(CatalogModel):
    id: str
    type: DiscountType
    description: str
    threshold: float | None = None
    qualifier: DiscountQualifier | None = None
    additional_free_minutes: int = Field(..., ge=0)
    metadata: dict[str, Any] | None = None


class ParkingLot(CatalogModel):
    id: str
    name: str
    address: str
    coordinates: Coordinates
    free_minutes: int = Field(..., ge=0)
    tiers: tuple[RateTier, ...] = ()
    discounts: tuple[ParkingDiscount, ...] = ()
    amenities: tuple[str, ...] = ()
    operator: str = ""
    tags: tuple[str, ...] = ()
    metadata: dict[str, Any] | None = None
    image_url: str | None = None


class PricingBreakdown(CatalogModel):
    lot_id: str
    lot_name: str
    base_minutes_charged: int
    effective_free_minutes: int
    effective_paid_minutes: int
    total_cost: float
    discounts_applied: tuple[ParkingDiscount, ...] = ()
    hourly_rate_after_free: float


@dataclass(frozen=True)
class PricingQuery:
    duration_minutes: int
    spend_amount: float = 0.0
    qualifiers: frozenset[DiscountQualifier] = field(default_factory=frozenset)
