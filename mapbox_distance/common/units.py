# mapbox_distance/common/units.py
"""
Перевод единиц расстояния.
"""

from __future__ import annotations

from mapbox_distance.common.constants import METERS_PER_MILE


def meters_to_miles(meters: float) -> float:
    """Переводит метры в мили."""
    return meters / METERS_PER_MILE


def miles_to_meters(miles: float) -> float:
    """Переводит мили в метры."""
    return miles * METERS_PER_MILE
