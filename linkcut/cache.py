"""Key/value caching of resolved links."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import redis

log = logging.getLogger(__name__)


class Cacher(ABC):
    """A string cache with per-entry expiry."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the cached value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str, ttl: int) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds (no expiry if ``ttl`` <= 0)."""


class RedisCacher(Cacher):
    """Cacher backed by a Redis client."""

    def __init__(self, client: Any) -> None:
        self._client = client

    def get(self, key: str) -> str | None:
        value = self._client.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode()
        return value

    def set(self, key: str, value: str, ttl: int) -> None:
        self._client.set(key, value, ex=ttl if ttl > 0 else None)


def connect_redis(host: str, port: int, retry_interval: int) -> redis.Redis:
    """Create a Redis client and block until it answers a ping."""
    client = redis.Redis(host=host or "localhost", port=port, db=0, decode_responses=True)
    while True:
        try:
            client.ping()
        except redis.RedisError:
            log.warning(
                "[Redis] Connection attempt failed, retrying in %d seconds", retry_interval
            )
            time.sleep(retry_interval)
            continue
        log.info("[Redis] Connection set")
        return client