# 3- 3- geocoding + bubble scaling

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


# ---------------------------------
# Known city centroids (GCC markets)
# ---------------------------------
DEFAULT_CITY_COORDINATES: Mapping[str, Coordinates] = MappingProxyType({
    "Abu Dhabi": Coordinates(24.4539, 54.3773),
    "Dubai": Coordinates(25.2048, 55.2708),
    "Sharjah": Coordinates(25.3573, 55.4033),
    "Riyadh": Coordinates(24.7136, 46.6753),
    "Doha": Coordinates(25.2854, 51.531),
    "Kuwait City": Coordinates(29.3759, 47.9774),
    "Manama": Coordinates(26.0667, 50.5577),
})

BUBBLE_METRICS = ["revenue", "spend", "impressions", "clicks", "conversions"]

DEFAULT_COLOR = "#3B82F6"
DEFAULT_MIN_RADIUS = 8
DEFAULT_MAX_RADIUS = 50


class CoordinateResolver:
    """
    Read-only name -> Coordinates lookup.

    The table is copied on construction, so later changes to the mapping
    passed in do not leak into the resolver.
    """

    def __init__(self, table: Optional[Mapping[str, Coordinates]] = None):
        source = DEFAULT_CITY_COORDINATES if table is None else table
        self._table: Mapping[str, Coordinates] = MappingProxyType(dict(source))

    @property
    def table(self) -> Mapping[str, Coordinates]:
        return self._table

    def resolve(self, name: Optional[str]) -> Optional[Coordinates]:
        if name is None:
            return None
        return self._table.get(name)

    def extended(self, extra: Mapping[str, Coordinates]) -> "CoordinateResolver":
        return CoordinateResolver({**self._table, **extra})


# ==================================================
# Regional buckets -> bubble points
# ==================================================
def to_bubble_points(
        regional: pd.DataFrame,
        value_type: str,
        resolver: Optional[CoordinateResolver] = None,
) -> pd.DataFrame:
    """
    Geocode merged regional buckets into bubble-map points.

    Regions the resolver does not know are dropped with a warning.
    Output columns: region, country, latitude, longitude, value, additional_data
    """
    if value_type not in BUBBLE_METRICS:
        raise ValueError(f"Unsupported bubble metric: {value_type}")

    resolver = resolver or CoordinateResolver()
    columns = ["region", "country", "latitude", "longitude", "value", "additional_data"]

    points: List[Dict] = []

    for row in regional.to_dict("records"):
        coords = resolver.resolve(row.get("region"))
        if coords is None:
            logger.warning("Coordinates not found for region: %s", row.get("region"))
            continue

        points.append({
            "region": row.get("region"),
            "country": row.get("country"),
            "latitude": coords.latitude,
            "longitude": coords.longitude,
            "value": row[value_type],
            "additional_data": {m: row.get(m, 0) for m in BUBBLE_METRICS},
        })

    return pd.DataFrame(points, columns=columns)


# ==================================================
# Radius / colour interpolation
# ==================================================
def bubble_color(ratio: float) -> str:
    """Blue (low) -> yellow -> red (high) for a ratio in [0, 1]."""
    ratio = min(max(ratio, 0.0), 1.0)

    if ratio < 0.5:
        i = ratio * 2
        r, g, b = 59 + i * 196, 130 + i * 125, 246 - i * 246
    else:
        i = (ratio - 0.5) * 2
        r, g, b = 255, 255 - i * 255, 0

    return f"rgb({math.floor(r)}, {math.floor(g)}, {math.floor(b)})"


def scale_bubbles(
        points: pd.DataFrame,
        min_radius: float = DEFAULT_MIN_RADIUS,
        max_radius: float = DEFAULT_MAX_RADIUS,
) -> pd.DataFrame:
    """
    Add `radius` and `color` by linear interpolation between the observed
    min and max value. A flat range gets the midpoint radius and DEFAULT_COLOR.
    """
    points = points.copy()

    if points.empty:
        points["radius"] = pd.Series(dtype=float)
        points["color"] = pd.Series(dtype=object)
        return points

    lo = points["value"].min()
    hi = points["value"].max()

    if hi == lo:
        points["radius"] = (min_radius + max_radius) / 2
        points["color"] = DEFAULT_COLOR
        return points

    ratio = (points["value"] - lo) / (hi - lo)
    points["radius"] = min_radius + (max_radius - min_radius) * ratio
    points["color"] = ratio.apply(bubble_color)
    return points


def map_center(points: pd.DataFrame) -> Optional[Tuple[float, float]]:
    if points.empty:
        return None
    return float(points["latitude"].mean()), float(points["longitude"].mean())
