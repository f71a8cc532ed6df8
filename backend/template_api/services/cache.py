"""Process-local key/value store backing the demo cache endpoints.

One instance lives on the Flask app (`app.extensions['demo_cache']`).
Entries expire after `default_ttl_minutes` unless a per-entry value is given;
expired entries read as missing and are purged on the next write or listing.
"""
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Any, Callable, Dict, List, Optional, Tuple

DEFAULT_TTL_MINUTES = 30

MISSING = object()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryCache:
    def __init__(self, default_ttl_minutes: int = DEFAULT_TTL_MINUTES,
                 clock: Optional[Callable[[], datetime]] = None):
        self.default_ttl_minutes = default_ttl_minutes
        self._clock = clock or _utcnow
        self._data: Dict[str, Tuple[Any, datetime]] = {}
        self._lock = Lock()

    def _purge(self, now: datetime) -> None:
        for key in [k for k, (_, exp) in self._data.items() if exp <= now]:
            del self._data[key]

    def get(self, key: str, default: Any = MISSING) -> Any:
        """Return the live value for key, or `default` when absent or expired."""
        with self._lock:
            entry = self._data.get(key)
            if entry is None or entry[1] <= self._clock():
                return default
            return entry[0]

    def set(self, key: str, value: Any, ttl_minutes: Optional[int] = None) -> bool:
        """Store value; returns True when no live entry existed for key."""
        minutes = self.default_ttl_minutes if ttl_minutes is None else ttl_minutes
        if minutes <= 0:
            raise ValueError('ttl_minutes must be positive')
        with self._lock:
            now = self._clock()
            self._purge(now)
            created = key not in self._data
            self._data[key] = (value, now + timedelta(minutes=minutes))
            return created

    def delete(self, key: str) -> bool:
        with self._lock:
            entry = self._data.pop(key, None)
            return entry is not None and entry[1] > self._clock()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not MISSING

    def keys(self) -> List[str]:
        with self._lock:
            self._purge(self._clock())
            return sorted(self._data)


__all__ = ['MemoryCache', 'MISSING', 'DEFAULT_TTL_MINUTES']
