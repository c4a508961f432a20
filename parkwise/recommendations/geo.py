from __future__ import annotations

from collections.abc import Sequence

import numpy as np

EARTH_RADIUS_KM = 6371.0


def haversine_km_many(
    origin: tuple[float, float],
    points: Sequence[tuple[float, float]],
    radius_km: float = EARTH_RADIUS_KM,
) -> np.ndarray:
    """Great-circle distances (km) from ``origin`` to each ``(lat, lng)`` point."""
    if len(points) == 0:
        return np.zeros(0)

    coords = np.radians(np.asarray(points, dtype=float))
    lat1, lng1 = np.radians(origin[0]), np.radians(origin[1])
    lat2, lng2 = coords[:, 0], coords[:, 1]

    a = (
        np.sin((lat2 - lat1) / 2) ** 2
        + np.cos(lat1) * np.cos(lat2) * np.sin((lng2 - lng1) / 2) ** 2
    )
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return radius_km * c


def haversine_km(
    lat1: float,
    lng1: float,
    lat2: float,
    lng2: float,
    radius_km: float = EARTH_RADIUS_KM,
) -> float:
    return float(haversine_km_many((lat1, lng1), [(lat2, lng2)], radius_km)[0])
