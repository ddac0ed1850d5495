# mapbox_distance/core/distance/models.py
"""
Модели данных: координаты и записи кэша адресов.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from numbers import Real
from typing import Any, Sequence, Union


# Пара (долгота, широта). Принимается и list, и tuple
Coordinate = Sequence[float]
Location = Union[str, Coordinate]

# Диапазон модулей, в котором JavaScript печатает число без экспоненты
_PLAIN_NOTATION_MIN = 1e-6
_PLAIN_NOTATION_MAX = 1e21


@dataclass(frozen=True)
class CachedAddressEntry:
    """Адрес и координаты, найденные для него геокодером."""
    address: str
    coordinate: Coordinate


def is_real_number(value: Any) -> bool:
    """Конечное вещественное число (bool не считается числом)."""
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def is_coordinate(value: Any) -> bool:
    """Проверяет, что значение — пара из двух конечных чисел."""
    return (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and is_real_number(value[0])
        and is_real_number(value[1])
    )


def format_number(value: float) -> str:
    """
    Число в том виде, в каком его печатает JavaScript (Number#toString).

    Любое вещественное (int, Fraction) сначала приводится к float.
    Целые значения печатаются без ".0" (10.0 -> "10"). В диапазоне
    1e-6 <= |x| < 1e21 экспонента не используется (1e-05 -> "0.00001"),
    за его пределами экспонента пишется со знаком и без ведущих нулей
    (5e-07 -> "5e-7", 1e+21 -> "1e+21").
    """
    number = float(value)
    if number == 0:
        return "0"

    text = repr(number)
    if _PLAIN_NOTATION_MIN <= abs(number) < _PLAIN_NOTATION_MAX:
        plain = format(Decimal(text), "f")
        if "." in plain:
            plain = plain.rstrip("0").rstrip(".")
        return plain

    mantissa, _, exponent = text.partition("e")
    if mantissa.endswith(".0"):
        mantissa = mantissa[:-2]
    power = int(exponent)
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def format_coordinate(coordinate: Coordinate) -> str:
    """Кодирует координату как "долгота,широта" без пробелов."""
    return ",".join(format_number(part) for part in coordinate)
