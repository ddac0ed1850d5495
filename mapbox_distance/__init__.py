# mapbox_distance/__init__.py
"""
Клиент Mapbox: геокодирование адресов и расстояние по дорогам в милях.
"""

from mapbox_distance.common.units import meters_to_miles, miles_to_meters
from mapbox_distance.core.distance import (
    AddressCache,
    CachedAddressEntry,
    ConfigurationError,
    Coordinate,
    DistanceServiceError,
    GeocodingServiceError,
    InvalidLocationError,
    Location,
    LocationDistanceClient,
    MalformedResponseError,
    MapboxDistanceError,
    NetworkError,
    NoMatchError,
    ServiceError,
)

__version__ = "1.0.0"

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
    "meters_to_miles",
    "miles_to_meters",
]
