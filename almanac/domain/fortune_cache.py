"""Cache FIFO borné des résultats de fortune.

L'éviction suit l'ordre d'insertion (et non l'ordre d'accès): une lecture ne rafraîchit pas
une entrée. Un verrou protège la table car FastAPI exécute les routes synchrones dans un pool
de threads.
"""

from __future__ import annotations

import threading
from datetime import date

from almanac.domain.entities import FortuneResult, UserProfile

DEFAULT_CAPACITY = 100


def cache_key(profile: UserProfile, day: date) -> str:
    """Clé composite: nom, date et heure de naissance brutes, date ISO interrogée."""
    return f"{profile.name}_{profile.birth_date}_{profile.birth_time}_{day.isoformat()}"


class FortuneCache:
    """Cache FIFO de `FortuneResult` indexé par `cache_key`."""

    def __init__(self, max_size: int = DEFAULT_CAPACITY):
        if max_size < 1:
            raise ValueError("max_size doit être >= 1")
        self.max_size = max_size
        self._entries: dict[str, FortuneResult] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> FortuneResult | None:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, value: FortuneResult) -> None:
        """Insère `value`; évince d'abord la plus ancienne clé si la capacité est atteinte."""
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_size:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
            self._entries[key] = value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def stats(self) -> dict[str, int]:
        return {"size": len(self._entries), "maxSize": self.max_size}
