#!/usr/bin/env python3
# mapbox_distance/__main__.py
"""
Точка входа командной строки.
Печатает расстояние по дорогам в милях между двумя локациями.
"""

from __future__ import annotations

import asyncio
import sys

from mapbox_distance.common.logger import log_error, setup_logging
from mapbox_distance.core.distance import LocationDistanceClient, Location, MapboxDistanceError


def print_usage() -> None:
    """Выводит справку по использованию."""
    print("""
Использование:
    python -m mapbox_distance ORIGIN DESTINATION

ORIGIN и DESTINATION — адрес ("1 Infinite Loop, Cupertino")
или координаты в виде "долгота,широта" ("-122.03,37.33").

Токен берётся из переменной окружения MAPBOX_ACCESS_TOKEN.
    """)


def parse_location(raw: str) -> Location:
    """
    Разбирает аргумент командной строки.
    Строка из двух чисел через запятую считается координатами,
    всё остальное — адресом.
    """
    parts = raw.split(",")
    if len(parts) == 2:
        try:
            return (float(parts[0]), float(parts[1]))
        except ValueError:
            pass
    return raw


async def main(origin: str, destination: str) -> float:
    """
    Считает расстояние между двумя локациями.

    Args:
        origin: Адрес или "долгота,широта"
        destination: Адрес или "долгота,широта"

    Returns:
        Расстояние в милях
    """
    setup_logging()

    async with LocationDistanceClient.from_settings() as client:
        return await client.get_driving_distance(
            parse_location(origin),
            parse_location(destination),
        )


def run(argv: list[str] | None = None) -> int:
    """Запуск из командной строки. Возвращает код выхода."""
    args = sys.argv[1:] if argv is None else argv

    if args and args[0].lower() in ("--help", "-h"):
        print_usage()
        return 0

    if len(args) != 2:
        print("Ошибка: нужно указать ровно две локации")
        print_usage()
        return 1

    try:
        miles = asyncio.run(main(args[0], args[1]))
    except MapboxDistanceError as e:
        asyncio.run(log_error(str(e), extra={"error": type(e).__name__}))
        return 1

    print(f"{miles:.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(run())
