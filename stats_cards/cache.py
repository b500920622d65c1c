"""Response cache: Vercel KV (Upstash Redis) with an in-memory fallback."""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from upstash_redis import Redis

from . import config
from .models import CardResponse

logger = logging.getLogger(__name__)

KEY_PREFIX = "stats-card"


def cache_key(kind: str, username: str) -> str:
    return ":".join((KEY_PREFIX, kind, username))


class MemoryCache:
    """Per-instance cache, cleared on cold start. Expired entries read as misses."""

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[float, CardResponse]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[CardResponse]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: CardResponse, ttl: int) -> None:
        with self._lock:
            self._entries[key] = (self._clock() + ttl, value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class KVCache:
    """Vercel KV backend. Backend errors are logged and read as a miss."""

    def __init__(self, client: Redis):
        self._kv = client

    def get(self, key: str) -> Optional[CardResponse]:
        try:
            raw = self._kv.get(key)
        except Exception as e:
            logger.warning("KV get %s failed: %s", key, e)
            return None
        if raw is None:
            return None
        try:
            return CardResponse.from_json(raw)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Dropping malformed cache entry %s: %s", key, e)
            return None

    def put(self, key: str, value: CardResponse, ttl: int) -> None:
        try:
            self._kv.setex(key, ttl, value.to_json())
        except Exception as e:
            logger.warning("KV setex %s failed: %s", key, e)


_default_cache = None
_default_lock = threading.Lock()


def get_cache():
    """Process-wide cache: KV when configured, otherwise memory."""
    global _default_cache
    with _default_lock:
        if _default_cache is None:
            if config.KV_REST_API_URL and config.KV_REST_API_TOKEN:
                logger.info("Using Vercel KV cache at %s", config.KV_REST_API_URL)
                _default_cache = KVCache(Redis(url=config.KV_REST_API_URL, token=config.KV_REST_API_TOKEN))
            else:
                _default_cache = MemoryCache()
        return _default_cache
