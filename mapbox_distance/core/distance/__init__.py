# mapbox_distance/core/distance/__init__.py
"""
Расчёт расстояния по дорогам через Mapbox.
Геокодирование адресов, кэш адресов, матрица расстояний.
"""

from mapbox_distance.core.distance.cache import AddressCache
from mapbox_distance.core.distance.client import LocationDistanceClient
from mapbox_distance.core.distance.errors import (
    ConfigurationError,
    DistanceServiceError,
    GeocodingServiceError,
    InvalidLocationError,
    MalformedResponseError,
    MapboxDistanceError,
    NetworkError,
    NoMatchError,
    ServiceError,
)
from mapbox_distance.core.distance.models import CachedAddressEntry, Coordinate, Location

__all__ = [
    "AddressCache",
    "CachedAddressEntry",
    "Coordinate",
    "Location",
    "LocationDistanceClient",
    "MapboxDistanceError",
    "ConfigurationError",
    "InvalidLocationError",
    "NoMatchError",
    "ServiceError",
    "GeocodingServiceError",
    "DistanceServiceError",
    "MalformedResponseError",
    "NetworkError",
]
