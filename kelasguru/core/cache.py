# core/cache.py

"""Кэш с одной ячейкой и фиксированным временем жизни"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass
class CacheSlot:
    key: str
    value: Any
    timestamp: float


class TTLCache:
    """Хранит одно значение; запись с другим ключом вытесняет предыдущую"""

    def __init__(self, ttl_seconds: float = 60.0, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._slot: Optional[CacheSlot] = None

    def get(self, key: str) -> Optional[Any]:
        """Значение из кэша или None, если ячейка пуста, чужая или устарела"""
        slot = self._slot
        if slot is None or slot.key != key or slot.value is None:
            return None
        if self.clock() - slot.timestamp > self.ttl_seconds:
            return None
        return slot.value

    def set(self, key: str, value: Any, timestamp: Optional[float] = None) -> None:
        self._slot = CacheSlot(key=key, value=value, timestamp=self.clock() if timestamp is None else timestamp)

    def invalidate(self) -> None:
        self._slot = None

    @property
    def slot(self) -> Optional[CacheSlot]:
        return self._slot
