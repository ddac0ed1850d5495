# mapbox_distance/core/distance/errors.py
"""
Исключения клиента расстояний.

Каждое исключение хранит структурированные поля (адрес, координаты,
HTTP-статус), чтобы вызывающий код мог ветвиться по типу ошибки,
не разбирая текст сообщения.
"""

from __future__ import annotations

from typing import Any

from mapbox_distance.core.distance.models import Coordinate, format_coordinate


class MapboxDistanceError(Exception):
    """Базовое исключение библиотеки."""


class ConfigurationError(MapboxDistanceError):
    """Не передан или пустой токен доступа."""


class InvalidLocationError(MapboxDistanceError):
    """Локация не является ни адресом, ни парой координат."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid value `{value!r}` given as location.")


class NoMatchError(MapboxDistanceError):
    """Геокодер не нашёл ни одного кандидата."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"No matching locations for provided address `{address}`.")


class ServiceError(MapboxDistanceError):
    """Сервис ответил статусом, отличным от 200."""

    def __init__(self, message: str, status_code: int, status_text: str) -> None:
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(message)


class GeocodingServiceError(ServiceError):
    """Ошибка HTTP при геокодировании."""

    def __init__(self, address: str, status_code: int, status_text: str) -> None:
        self.address = address
        super().__init__(
            f"Error geocoding provided address `{address}`. "
            f"Server responded with status code {status_code}. Message: {status_text}",
            status_code,
            status_text,
        )


class DistanceServiceError(ServiceError):
    """Ошибка HTTP при запросе матрицы расстояний."""

    def __init__(
        self,
        origin: Coordinate,
        destination: Coordinate,
        status_code: int,
        status_text: str,
    ) -> None:
        self.origin = origin
        self.destination = destination
        super().__init__(
            f"Error getting driving distance between provided coordinates "
            f"`{format_coordinate(origin)}` and `{format_coordinate(destination)}`. "
            f"Server responded with status code {status_code}. Message: {status_text}",
            status_code,
            status_text,
        )


class MalformedResponseError(MapboxDistanceError):
    """Ответ 200, но тело не той формы."""

    def __init__(
        self,
        message: str,
        *,
        address: str | None = None,
        origin: Coordinate | None = None,
        destination: Coordinate | None = None,
    ) -> None:
        self.address = address
        self.origin = origin
        self.destination = destination
        super().__init__(message)


class NetworkError(MapboxDistanceError):
    """
    Сбой транспорта: соединение, таймаут или невалидный JSON.
    Исходное исключение доступно в __cause__.
    """

    def __init__(
        self,
        message: str,
        *,
        address: str | None = None,
        origin: Coordinate | None = None,
        destination: Coordinate | None = None,
    ) -> None:
        self.address = address
        self.origin = origin
        self.destination = destination
        super().__init__(message)
