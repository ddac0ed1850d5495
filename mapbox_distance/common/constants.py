# mapbox_distance/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


# Базовый адрес Mapbox API (не настраивается)
MAPBOX_BASE_URL = "https://api.mapbox.com"

# Метров в одной международной миле (точное значение)
METERS_PER_MILE = 1609.344

# Таймаут HTTP-запросов по умолчанию, секунды
DEFAULT_HTTP_TIMEOUT = 10.0
