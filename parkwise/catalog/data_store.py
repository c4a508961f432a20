from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ..errors import CalculationError, DataUnavailable
from ..pricing.models import ParkingLot
from ..pricing.tiers import validate_tiers
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig

logger = logging.getLogger(__name__)

_LOTS_ADAPTER = TypeAdapter(list[ParkingLot])

_lots: list[ParkingLot] | None = None
_version: int = 0


def load_lots(path: Path) -> list[ParkingLot]:
    """
    Read and validate a catalog file.

    Accepts either a bare JSON list of lots or an object with a ``data`` list.
    Raises ``DataUnavailable`` if the file is missing or malformed, if lot ids
    repeat, or if any lot's tiers are out of order or have gaps.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as exc:
        raise DataUnavailable(f"Parking lot catalog not found: {path}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise DataUnavailable(f"Could not read parking lot catalog {path}: {exc}") from exc

    if isinstance(raw, dict):
        raw = raw.get("data")
    if not isinstance(raw, list):
        raise DataUnavailable(f"Unsupported catalog structure in {path}")

    try:
        lots = _LOTS_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        raise DataUnavailable(f"Invalid parking lot catalog {path}: {exc}") from exc

    seen: set[str] = set()
    for lot in lots:
        if lot.id in seen:
            raise DataUnavailable(f"Duplicate parking lot id in {path}: {lot.id}")
        seen.add(lot.id)
        try:
            validate_tiers(lot)
        except CalculationError as exc:
            raise DataUnavailable(f"Invalid rate tiers in {path}: {exc}") from exc

    return lots


def list_lots(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> list[ParkingLot]:
    """Return the in-memory catalog, loading it on first call."""
    global _lots, _version
    if _lots is None:
        try:
            lots = load_lots(config.catalog_path)
        except DataUnavailable:
            logger.warning("Failed to load parking lot catalog", exc_info=True)
            raise
        _lots = lots
        _version += 1
        logger.info("Loaded %d parking lots from %s", len(lots), config.catalog_path)
    return _lots


def get_lot_by_id(lot_id: str, config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> ParkingLot | None:
    for lot in list_lots(config):
        if lot.id == lot_id:
            return lot
    return None


def catalog_version() -> int:
    """Bumped on every successful load; lets callers key caches on it."""
    return _version


def reload_catalog() -> None:
    """Forget the loaded catalog so the next ``list_lots`` call reloads it."""
    global _lots
    _lots = None
