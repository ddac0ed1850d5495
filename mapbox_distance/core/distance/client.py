# mapbox_distance/core/distance/client.py
"""
Клиент Mapbox для расчёта расстояния по дорогам.
Геокодирование адресов, кэш адресов, матрица расстояний.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional
from urllib.parse import quote

import httpx

from mapbox_distance.common.constants import DEFAULT_HTTP_TIMEOUT, MAPBOX_BASE_URL
from mapbox_distance.common.logger import log_debug, log_warning
from mapbox_distance.common.units import meters_to_miles
from mapbox_distance.core.distance.cache import AddressCache
from mapbox_distance.core.distance.errors import (
    ConfigurationError,
    DistanceServiceError,
    GeocodingServiceError,
    InvalidLocationError,
    MalformedResponseError,
    NetworkError,
    NoMatchError,
)
from mapbox_distance.core.distance.models import (
    Coordinate,
    Location,
    format_coordinate,
    is_coordinate,
    is_real_number,
)


# Символы, которые encodeURIComponent оставляет как есть (помимо A-Z a-z 0-9 - _ . ~)
_URI_COMPONENT_SAFE = "!*'()"


class LocationDistanceClient:
    """
    Клиент для расчёта расстояния по дорогам между двумя локациями.

    Локация — строка с адресом или пара (долгота, широта).
    Адреса геокодируются через Mapbox Geocoding API, результат
    кэшируется в памяти экземпляра. Расстояние берётся из
    Mapbox Directions Matrix API и возвращается в милях.
    """

    BASE_URL = MAPBOX_BASE_URL

    def __init__(
        self,
        access_token: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ) -> None:
        """
        Инициализация клиента. Сетевых запросов не выполняет.

        Args:
            access_token: Токен доступа Mapbox
            http_client: Готовый httpx.AsyncClient (закрывает его владелец)
            timeout: Таймаут запросов для собственного HTTP клиента, секунды

        Raises:
            ConfigurationError: Токен не передан или пустой
        """
        if not isinstance(access_token, str) or access_token == "":
            raise ConfigurationError("No Mapbox access token provided.")

        self._access_token = access_token
        self._cache = AddressCache()
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(
        cls,
        settings: Any = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> "LocationDistanceClient":
        """
        Создаёт клиента по настройкам (MAPBOX_ACCESS_TOKEN, MAPBOX_HTTP_TIMEOUT).

        Raises:
            ConfigurationError: Токен в настройках не задан
        """
        if settings is None:
            from mapbox_distance.config import get_settings
            settings = get_settings()

        return cls(
            settings.mapbox.MAPBOX_ACCESS_TOKEN,
            http_client=http_client,
            timeout=settings.mapbox.MAPBOX_HTTP_TIMEOUT,
        )

    async def close(self) -> None:
        """Закрывает HTTP клиент, если он создан этим экземпляром."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "LocationDistanceClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # =========================================================================
    # КЭШ
    # =========================================================================

    @property
    def cache(self) -> AddressCache:
        """Кэш адресов этого клиента."""
        return self._cache

    def get_cache_stats(self) -> dict[str, float]:
        """Статистика кэша адресов."""
        return self._cache.get_stats()

    def clear_cache(self) -> int:
        """Очищает кэш адресов. Возвращает число удалённых записей."""
        return self._cache.clear()

    # =========================================================================
    # ПУБЛИЧНЫЕ ОПЕРАЦИИ
    # =========================================================================

    async def normalize_to_coordinate(self, location: Location) -> Coordinate:
        """
        Приводит локацию к паре координат.

        Пара координат возвращается без изменений. Адрес ищется в кэше,
        при промахе геокодируется (результат попадает в кэш).

        Raises:
            InvalidLocationError: Локация не строка и не пара чисел
        """
        if isinstance(location, str):
            cached = self._cache.get(location)
            if cached is not None:
                await log_debug("Адрес найден в кэше", extra={"address": location})
                return cached
            return await self.get_address_coordinates(location)

        if is_coordinate(location):
            return location

        raise InvalidLocationError(location)

    async def get_address_coordinates(self, address: str) -> Coordinate:
        """
        Геокодирует адрес через Mapbox.

        Кэш не читается, но успешный результат записывается в кэш
        под тем же адресом. Mapbox ищет нечётко, поэтому найденная
        точка может не совпадать с адресом в точности.

        Raises:
            InvalidLocationError: Адрес не строка
            GeocodingServiceError: Ответ не 200
            NoMatchError: Список кандидатов пуст
            MalformedResponseError: У первого кандидата нет координат
            NetworkError: Сбой транспорта или невалидный JSON
        """
        if not isinstance(address, str):
            raise InvalidLocationError(address)

        url = (
            f"{self.BASE_URL}/geocoding/v5/mapbox.places/"
            f"{quote(address, safe=_URI_COMPONENT_SAFE)}.json"
            f"?types=address&access_token={self._access_token}"
        )

        await log_debug("Геокодирование адреса", extra={"address": address})

        try:
            response = await self._client.get(url)
            if response.status_code != 200:
                await log_warning(
                    "Геокодер вернул ошибку",
                    extra={"address": address, "status_code": response.status_code},
                )
                raise GeocodingServiceError(address, response.status_code, response.reason_phrase)
            body = response.json()
        except httpx.HTTPError as e:
            await log_warning(
                "Сбой сети при геокодировании",
                extra={"address": address, "error": repr(e)},
            )
            raise NetworkError(
                f"Error geocoding provided address `{address}`. Message: {e}",
                address=address,
            ) from e
        except ValueError as e:
            raise NetworkError(
                f"Error geocoding provided address `{address}`. Message: invalid JSON ({e})",
                address=address,
            ) from e

        features = body.get("features") if isinstance(body, dict) else None
        if not isinstance(features, list) or len(features) == 0:
            await log_debug("Геокодер не нашёл кандидатов", extra={"address": address})
            raise NoMatchError(address)

        coordinate = self._extract_feature_coordinate(features[0])
        if coordinate is None:
            raise MalformedResponseError(
                f"Geocoding response for address `{address}` has no coordinates for the best match.",
                address=address,
            )

        self._cache.put(address, coordinate)
        await log_debug(
            "Адрес геокодирован",
            extra={"address": address, "coordinate": format_coordinate(coordinate)},
        )

        return coordinate

    async def compute_distance_miles(self, origin: Coordinate, destination: Coordinate) -> float:
        """
        Расстояние по дорогам между двумя координатами, в милях.

        Из первой строки матрицы берётся первое ненулевое значение
        (нулевое — расстояние от точки до самой себя). Если ненулевых
        значений нет, расстояние равно 0.

        Raises:
            InvalidLocationError: Аргумент не пара чисел
            DistanceServiceError: Ответ не 200
            MalformedResponseError: В ответе нет матрицы distances
            NetworkError: Сбой транспорта или невалидный JSON
        """
        for value in (origin, destination):
            if not is_coordinate(value):
                raise InvalidLocationError(value)

        pair = f"`{format_coordinate(origin)}` and `{format_coordinate(destination)}`"
        route = {"origin": format_coordinate(origin), "destination": format_coordinate(destination)}
        url = (
            f"{self.BASE_URL}/directions-matrix/v1/mapbox/driving/"
            f"{format_coordinate(origin)};{format_coordinate(destination)}/"
            f"?annotations=distance&sources=0&access_token={self._access_token}"
        )

        await log_debug("Запрос матрицы расстояний", extra=route)

        try:
            response = await self._client.get(url)
            if response.status_code != 200:
                await log_warning(
                    "Матрица расстояний вернула ошибку",
                    extra={**route, "status_code": response.status_code},
                )
                raise DistanceServiceError(origin, destination, response.status_code, response.reason_phrase)
            body = response.json()
        except httpx.HTTPError as e:
            await log_warning(
                "Сбой сети при запросе матрицы расстояний",
                extra={**route, "error": repr(e)},
            )
            raise NetworkError(
                f"Error getting driving distance between provided coordinates {pair}. Message: {e}",
                origin=origin,
                destination=destination,
            ) from e
        except ValueError as e:
            raise NetworkError(
                f"Error getting driving distance between provided coordinates {pair}. "
                f"Message: invalid JSON ({e})",
                origin=origin,
                destination=destination,
            ) from e

        distances = body.get("distances") if isinstance(body, dict) else None
        if not self._is_distance_matrix(distances):
            raise MalformedResponseError(
                f"Failed to get driving distance between provided coordinates {pair}.",
                origin=origin,
                destination=destination,
            )

        distance = next((value for value in distances[0] if value != 0), None)
        distance_miles = meters_to_miles(distance) if distance is not None else 0.0

        await log_debug("Расстояние получено", extra={**route, "distance_miles": distance_miles})

        return distance_miles

    async def get_driving_distance(self, location1: Location, location2: Location) -> float:
        """
        Расстояние по дорогам между двумя локациями, в милях.

        Типы обеих локаций проверяются до любых запросов. Затем локации
        приводятся к координатам параллельно; первая ошибка отменяет
        незавершённую вторую задачу, запрос расстояния не выполняется.
        Если к этому моменту упали обе, пробрасывается ошибка первой локации.

        Args:
            location1: Адрес или пара (долгота, широта)
            location2: Адрес или пара (долгота, широта)

        Returns:
            Расстояние в милях
        """
        for location in (location1, location2):
            if not isinstance(location, str) and not is_coordinate(location):
                raise InvalidLocationError(location)

        tasks = [
            asyncio.create_task(self.normalize_to_coordinate(location1)),
            asyncio.create_task(self.normalize_to_coordinate(location2)),
        ]
        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            # Первая ошибка отменяет вторую локацию
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        errors = [task.exception() for task in tasks if not task.cancelled()]
        for error in errors:
            if error is not None:
                raise error

        origin, destination = (task.result() for task in tasks)
        return await self.compute_distance_miles(origin, destination)

    # =========================================================================
    # РАЗБОР ОТВЕТОВ
    # =========================================================================

    @staticmethod
    def _extract_feature_coordinate(feature: Any) -> Optional[Coordinate]:
        """Координаты кандидата геокодера или None, если их нет."""
        if not isinstance(feature, dict):
            return None
        geometry = feature.get("geometry")
        if not isinstance(geometry, dict):
            return None
        coordinates = geometry.get("coordinates")
        if not is_coordinate(coordinates):
            return None
        return (coordinates[0], coordinates[1])

    @staticmethod
    def _is_distance_matrix(distances: Any) -> bool:
        """Непустой список строк, каждая строка — список чисел."""
        if not isinstance(distances, list) or len(distances) == 0:
            return False
        return all(
            isinstance(row, list) and all(is_real_number(value) for value in row)
            for row in distances
        )
