"""
Stockage clé/valeur des sessions d'authentification.

Le store est possédé par l'application (app.state.session_store) et injecté
dans les services; aucun singleton de module. Les valeurs sont des dicts
sérialisés en JSON côté Redis. Une entrée peut expirer (ttl en secondes).
"""
import json
import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class SessionStore:
    """Interface minimale: get/set/delete et nettoyage par préfixe."""

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def set(self, key: str, value: Dict[str, Any], ttl: Optional[int] = None) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def clear_prefix(self, prefix: str) -> int:
        raise NotImplementedError


class MemorySessionStore(SessionStore):
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._data: Dict[str, Tuple[Dict[str, Any], Optional[float]]] = {}
        self._clock = clock

    def _expired(self, deadline: Optional[float]) -> bool:
        return deadline is not None and deadline <= self._clock()

    def _evict_expired(self) -> None:
        for k in [k for k, (_, deadline) in self._data.items() if self._expired(deadline)]:
            del self._data[k]

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, deadline = entry
        if self._expired(deadline):
            del self._data[key]
            return None
        return dict(value)

    def set(self, key: str, value: Dict[str, Any], ttl: Optional[int] = None) -> None:
        self._evict_expired()
        deadline = self._clock() + ttl if ttl else None
        self._data[key] = (dict(value), deadline)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear_prefix(self, prefix: str) -> int:
        self._evict_expired()
        keys = [k for k in self._data if k.startswith(prefix)]
        for k in keys:
            del self._data[k]
        return len(keys)


class RedisSessionStore(SessionStore):
    """Store Redis (client synchrone redis-py, decode_responses=True attendu)."""

    def __init__(self, client, ttl_seconds: Optional[int] = None):
        self._redis = client
        self._ttl = ttl_seconds

    @classmethod
    def from_url(cls, url: str, ttl_seconds: Optional[int] = None) -> "RedisSessionStore":
        import redis
        return cls(redis.from_url(url, encoding="utf-8", decode_responses=True), ttl_seconds)

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        raw = self._redis.get(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("session_store: valeur illisible pour %s, suppression", key)
            self._redis.delete(key)
            return None

    def set(self, key: str, value: Dict[str, Any], ttl: Optional[int] = None) -> None:
        self._redis.set(key, json.dumps(value), ex=ttl or self._ttl)

    def delete(self, key: str) -> None:
        self._redis.delete(key)

    def clear_prefix(self, prefix: str) -> int:
        keys = list(self._redis.scan_iter(match=f"{prefix}*"))
        if keys:
            self._redis.delete(*keys)
        return len(keys)


def build_session_store(url: Optional[str]) -> SessionStore:
    """Redis si une URL est configurée, sinon mémoire (dev/tests)."""
    if url:
        return RedisSessionStore.from_url(url)
    return MemorySessionStore()
