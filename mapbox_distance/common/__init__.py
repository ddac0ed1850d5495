# mapbox_distance/common/__init__.py
"""
Общие утилиты, константы и логгер.
"""

from mapbox_distance.common.logger import get_logger, log_info, log_error, log_warning, log_debug, setup_logging
from mapbox_distance.common.constants import TypeMsg
from mapbox_distance.common.units import meters_to_miles, miles_to_meters

__all__ = [
    "get_logger",
    "log_info",
    "log_error",
    "log_warning",
    "log_debug",
    "setup_logging",
    "TypeMsg",
    "meters_to_miles",
    "miles_to_meters",
]
