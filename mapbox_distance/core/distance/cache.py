# mapbox_distance/core/distance/cache.py
"""
Кэш адрес -> координаты в памяти процесса.
"""

from __future__ import annotations

from typing import Optional

from mapbox_distance.core.distance.models import CachedAddressEntry, Coordinate


class AddressCache:
    """
    Кэш результатов геокодирования.

    Ключ — адрес ровно в том виде, в каком его передали
    (без нормализации регистра и пробелов). Записи не вытесняются;
    повторная запись по тому же адресу заменяет предыдущую.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CachedAddressEntry] = {}
        self.hit_count = 0
        self.miss_count = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, address: object) -> bool:
        return address in self._entries

    def get(self, address: str) -> Optional[Coordinate]:
        """
        Возвращает координаты из кэша или None.
        Обновляет счётчики попаданий/промахов.
        """
        entry = self._entries.get(address)
        if entry is None:
            self.miss_count += 1
            return None

        self.hit_count += 1
        return entry.coordinate

    def put(self, address: str, coordinate: Coordinate) -> CachedAddressEntry:
        """Сохраняет координаты для адреса (upsert)."""
        entry = CachedAddressEntry(address=address, coordinate=(coordinate[0], coordinate[1]))
        self._entries[address] = entry
        return entry

    def entries(self) -> list[CachedAddressEntry]:
        """Записи в порядке добавления."""
        return list(self._entries.values())

    def clear(self) -> int:
        """Очищает кэш и счётчики. Возвращает число удалённых записей."""
        removed = len(self._entries)
        self._entries.clear()
        self.hit_count = 0
        self.miss_count = 0
        return removed

    def get_stats(self) -> dict[str, float]:
        """Статистика: размер, попадания, промахи, процент попаданий."""
        total_requests = self.hit_count + self.miss_count
        hit_rate = (self.hit_count / total_requests * 100) if total_requests > 0 else 0.0

        return {
            "cache_size": len(self._entries),
            "hit_count": self.hit_count,
            "miss_count": self.miss_count,
            "total_requests": total_requests,
            "hit_rate_percent": round(hit_rate, 2),
        }
