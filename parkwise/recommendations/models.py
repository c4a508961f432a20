from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator, model_validator

from ..pricing.models import (
    CamelModel,
    Coordinates,
    DiscountQualifier,
    ParkingLot,
    PricingBreakdown,
    PricingQuery,
)


class RecommendationRequest(CamelModel):
    duration_minutes: int = Field(..., gt=0)
    spend_amount: float = Field(default=0.0, ge=0.0)
    qualifiers: list[DiscountQualifier] = Field(default_factory=list)
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def _whole_minutes(cls, value: object) -> object:
        # Integer-valued floats such as 90.0 are accepted; strings and bools are not.
        if isinstance(value, (str, bool)):
            raise ValueError("durationMinutes must be a number")
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError("durationMinutes must be a whole number of minutes")
            return int(value)
        return value

    @model_validator(mode="after")
    def _origin_is_complete(self) -> RecommendationRequest:
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be provided together")
        return self

    @property
    def origin(self) -> Coordinates | None:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(lat=self.latitude, lng=self.longitude)

    def to_query(self) -> PricingQuery:
        return PricingQuery(
            duration_minutes=self.duration_minutes,
            spend_amount=self.spend_amount,
            qualifiers=frozenset(self.qualifiers),
        )


class RecommendationResponse(CamelModel):
    requested_duration_minutes: int
    recommendations: list[PricingBreakdown]
    generated_at: datetime


class RankedResult(CamelModel):
    lot: ParkingLot
    pricing: PricingBreakdown
    distance_km: float | None = None


class NearbyResponse(CamelModel):
    requested_duration_minutes: int
    origin: Coordinates | None = None
    results: list[RankedResult]
    generated_at: datetime
