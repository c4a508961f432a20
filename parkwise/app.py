from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .catalog.data_store import get_lot_by_id, list_lots
from .errors import DataUnavailable, InvalidInput
from .recommendations.cache import get_cache_stats
from .recommendations.models import (
    NearbyResponse,
    RecommendationRequest,
    RecommendationResponse,
)
from .recommendations.service import get_nearby, get_recommendations

logger = logging.getLogger(__name__)

app = FastAPI(title="ParkWise Pricing API", version="1.0.0")


# ── Error mapping ────────────────────────────────────────────────────────


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "issues": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(DataUnavailable)
async def data_unavailable_handler(request: Request, exc: DataUnavailable) -> JSONResponse:
    logger.error("Parking data unavailable: %s", exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "lots_loaded": len(list_lots())}


@app.get("/parking/lots")
def parking_lots() -> dict:
    return {"data": [lot.model_dump(mode="json", by_alias=True) for lot in list_lots()]}


@app.get("/parking/lots/{lot_id}")
def parking_lot(lot_id: str) -> dict:
    lot = get_lot_by_id(lot_id)
    if lot is None:
        raise HTTPException(status_code=404, detail=f"Parking lot {lot_id} not found")
    return {"data": lot.model_dump(mode="json", by_alias=True)}


@app.post("/parking/recommend", response_model=RecommendationResponse)
def recommend(body: RecommendationRequest) -> RecommendationResponse:
    return get_recommendations(body)


@app.post("/parking/nearby", response_model=NearbyResponse)
def nearby(body: RecommendationRequest) -> NearbyResponse:
    return get_nearby(body)


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
