"""Response caching in Redis."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Union

import redis

from adminkit.config import Settings

log = logging.getLogger(__name__)

REDIS_EXPIRED_TIMES = 600
_INVALIDATING_METHODS = ("POST", "PUT", "DELETE")


class RedisCache:
    """JSON values kept in Redis for ``expiry_time`` seconds."""

    def __init__(self, client: Any, expiry_time: int = REDIS_EXPIRED_TIMES) -> None:
        self.client = client
        self.expiry_time = expiry_time

    def is_connected(self) -> bool:
        """Whether the server answers a ping."""
        if self.client is None:
            return False
        try:
            self.client.ping()
        except redis.RedisError:
            return False
        return True

    def get(self, key: str) -> Any:
        """The decoded JSON value at ``key``, or None when absent or unreadable.

        A stored value that is not JSON raises ValueError.
        """
        try:
            raw = self.client.get(key)
        except redis.RedisError as exc:
            log.info("Cache fail to get: %s", exc)
            return None
        if raw is None:
            return None
        log.debug("Get from redis %s - %s", key, raw)
        return json.loads(raw)

    def set(self, key: str, value: Union[bytes, str]) -> None:
        """Store raw JSON bytes at ``key`` with the cache's expiry."""
        try:
            self.client.set(key, value, ex=self.expiry_time)
        except redis.RedisError as exc:
            log.error("Cache fail to set: %s", exc)
            raise
        log.debug("Set to redis %s - %s", key, value)

    def remove(self, *args: str) -> None:
        """Delete the given keys."""
        try:
            self.client.delete(*args)
        except redis.RedisError as exc:
            log.error("Cache fail to delete key %s: %s", list(args), exc)
            raise
        log.debug("Cache deleted key %s", list(args))

    def keys(self, pattern: str) -> List[str]:
        """The keys matching a glob-style pattern."""
        return [
            key.decode("utf-8") if isinstance(key, bytes) else key
            for key in self.client.keys(pattern)
        ]


def new_redis(settings: Settings) -> Optional[RedisCache]:
    """A cache on the configured Redis server, or None if it does not answer."""
    conf = settings.redis
    client = redis.Redis(
        host=conf.host,
        port=conf.port,
        password=conf.password or None,
        db=conf.database,
    )
    try:
        client.ping()
    except redis.RedisError as exc:
        log.error("Cannot connect to redis: %s", exc)
        return None
    expiry = settings.cache.expiry_time
    if expiry <= 0:
        expiry = REDIS_EXPIRED_TIMES
    return RedisCache(client, expiry)


class ResponseCache:
    """Serves cached GET responses and drops them when their objects change."""

    def __init__(self, cache: Optional[RedisCache]) -> None:
        self.cache = cache

    def _available(self) -> bool:
        if self.cache is None or not self.cache.is_connected():
            log.warning("Cache is not available")
            return False
        return True

    def lookup(self, method: str, uri: str) -> Optional[Dict[str, Any]]:
        """The cached response body for a GET request, or None."""
        if method != "GET" or not self._available():
            return None
        try:
            data = self.cache.get(uri)
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    def store(self, method: str, uri: str, status: int, body: Union[bytes, str]) -> None:
        """Record a finished request: cache a successful GET, or invalidate on change."""
        if not self._available() or status != 200:
            return
        try:
            if method == "GET":
                self.cache.set(uri, body)
            elif method in _INVALIDATING_METHODS:
                name = uri.split("/")[-1]
                keys = self.cache.keys(f"*{name}*")
                if keys:
                    self.cache.remove(*keys)
        except redis.RedisError:
            pass