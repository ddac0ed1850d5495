# mapbox_distance/config/loader.py
"""
Загрузчик конфигурации.
Базовые значения берутся из config/config.json (если файл есть),
токен и параметры логирования переопределяются из переменных окружения.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mapbox_distance.common.constants import DEFAULT_HTTP_TIMEOUT


# =============================================================================
# ОПРЕДЕЛЕНИЕ ПУТЕЙ
# =============================================================================

def get_project_root() -> Path:
    """Возвращает корневую директорию проекта."""
    return Path(__file__).parent.parent.parent


def get_config_path() -> Path:
    """
    Возвращает путь к файлу конфигурации.
    Путь можно переопределить переменной MAPBOX_DISTANCE_CONFIG.
    """
    custom_path = os.getenv("MAPBOX_DISTANCE_CONFIG")
    if custom_path:
        return Path(custom_path)
    return get_project_root() / "config" / "config.json"


def load_config_json() -> dict[str, Any]:
    """Загружает config.json и возвращает словарь."""
    config_path = get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Файл конфигурации не найден: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


# =============================================================================
# PYDANTIC МОДЕЛИ КОНФИГУРАЦИИ
# =============================================================================

class SystemSettings(BaseModel):
    """Системные настройки."""
    PROJECT_NAME: str = "mapbox_distance"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"


class LoggingSettings(BaseModel):
    """Настройки логирования."""
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "colored"

    @field_validator("LOG_FORMAT")
    @classmethod
    def check_format(cls, v: str) -> str:
        """Допускаются только форматы json и colored."""
        v = v.lower()
        if v not in ("json", "colored"):
            raise ValueError(f"Неизвестный формат логов: {v}")
        return v


class MapboxSettings(BaseModel):
    """Настройки Mapbox API."""
    MAPBOX_ACCESS_TOKEN: str = ""
    MAPBOX_HTTP_TIMEOUT: float = DEFAULT_HTTP_TIMEOUT

    @field_validator("MAPBOX_HTTP_TIMEOUT")
    @classmethod
    def check_timeout(cls, v: float) -> float:
        """Таймаут должен быть положительным."""
        if v <= 0:
            raise ValueError("MAPBOX_HTTP_TIMEOUT должен быть больше нуля")
        return v


# =============================================================================
# ГЛАВНЫЙ КЛАСС НАСТРОЕК
# =============================================================================

class Settings(BaseSettings):
    """
    Главный класс настроек.
    Агрегирует все секции конфигурации.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    system: SystemSettings = Field(default_factory=SystemSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    mapbox: MapboxSettings = Field(default_factory=MapboxSettings)

    @classmethod
    def from_config_json(cls) -> "Settings":
        """
        Создаёт объект Settings из config.json.
        При отсутствии файла используются значения по умолчанию.
        Переменные окружения имеют приоритет над файлом.
        """
        config_data: dict[str, Any] = {}
        if get_config_path().exists():
            config_data = load_config_json()

        # Фильтруем комментарии (ключи, начинающиеся с _comment_)
        filtered_data = {k: v for k, v in config_data.items() if not k.startswith("_comment_")}

        return cls(
            system=SystemSettings(
                PROJECT_NAME=filtered_data.get("PROJECT_NAME", "mapbox_distance"),
                VERSION=filtered_data.get("VERSION", "1.0.0"),
                ENVIRONMENT=os.getenv("ENVIRONMENT", filtered_data.get("ENVIRONMENT", "development")),
            ),
            logging=LoggingSettings(
                LOG_LEVEL=os.getenv("LOG_LEVEL", filtered_data.get("LOG_LEVEL", "INFO")),
                LOG_FORMAT=os.getenv("LOG_FORMAT", filtered_data.get("LOG_FORMAT", "colored")),
            ),
            mapbox=MapboxSettings(
                MAPBOX_ACCESS_TOKEN=os.getenv("MAPBOX_ACCESS_TOKEN", filtered_data.get("MAPBOX_ACCESS_TOKEN", "")),
                MAPBOX_HTTP_TIMEOUT=os.getenv(
                    "MAPBOX_HTTP_TIMEOUT", filtered_data.get("MAPBOX_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)
                ),
            ),
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Возвращает синглтон настроек.
    Использует кэширование для производительности.
    """
    from dotenv import load_dotenv

    env_path = get_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return Settings.from_config_json()
