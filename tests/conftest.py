# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import os
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("MAPBOX_ACCESS_TOKEN", "env_test_token")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from mapbox_distance.core.distance import LocationDistanceClient


TEST_TOKEN = "test_token"


# =============================================================================
# ФИКСТУРЫ HTTP (МОКИ)
# =============================================================================

@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Фабрика моков httpx.Response."""

    def _make(
        json_data: Any = None,
        status_code: int = 200,
        reason_phrase: str = "OK",
        json_error: Exception | None = None,
    ) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.reason_phrase = reason_phrase
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = json_data
        return response

    return _make


@pytest.fixture
def mock_http_client() -> AsyncMock:
    """Мок httpx.AsyncClient."""
    client = AsyncMock()
    client.get = AsyncMock()
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def client(mock_http_client: AsyncMock) -> LocationDistanceClient:
    """Клиент с тестовым токеном и замоканным транспортом."""
    return LocationDistanceClient(TEST_TOKEN, http_client=mock_http_client)


# =============================================================================
# ФИКСТУРЫ ОТВЕТОВ MAPBOX
# =============================================================================

@pytest.fixture
def geocode_body() -> Callable[..., dict[str, Any]]:
    """Тело ответа геокодера с одним или несколькими кандидатами."""

    def _body(*coordinates: list[float]) -> dict[str, Any]:
        return {
            "type": "FeatureCollection",
            "features": [
                {"geometry": {"type": "Point", "coordinates": list(coord)}}
                for coord in coordinates
            ],
        }

    return _body
