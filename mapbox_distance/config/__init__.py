# mapbox_distance/config/__init__.py
"""
Модуль конфигурации.
Экспортирует настройки библиотеки.
"""

from mapbox_distance.config.loader import Settings, get_settings

__all__ = ["Settings", "get_settings"]
