"""Redis-backed key-value storage with in-memory fallback."""
from __future__ import annotations

import logging
from typing import Any

import redis

logger = logging.getLogger(__name__)


class RedisStorage:
    """Key-value storage persisted in Redis.

    If Redis cannot be reached at start-up, or an operation fails later,
    the storage switches to process memory for the rest of its life and
    logs a warning. Callers never see a Redis error.
    """

    def __init__(
        self,
        redis_url: str | None = None,
        *,
        ttl_seconds: int | None = None,
        client: Any = None,
    ):
        self._redis_url = redis_url
        self._ttl_seconds = ttl_seconds
        self._client = client if client is not None else self._init_client()
        self._memory: dict[str, str] = {}

    @property
    def using_redis(self) -> bool:
        return self._client is not None

    def _init_client(self):
        if not self._redis_url:
            logger.warning("REDIS_URL is not set; cart storage uses in-memory fallback")
            return None

        try:
            client = redis.from_url(
                self._redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
            client.ping()
            logger.info("Redis cart storage enabled")
            return client
        except redis.RedisError as exc:
            logger.warning("Redis cart init failed, fallback to in-memory: %s", exc)
            return None

    def _switch_to_memory_fallback(self, reason: Exception | str) -> None:
        logger.warning("Redis cart fallback to memory mode: %s", reason)
        self._client = None

    def get(self, key: str) -> str | None:
        if self._client is None:
            return self._memory.get(key)
        try:
            value = self._client.get(key)
        except redis.RedisError as exc:
            self._switch_to_memory_fallback(exc)
            return self._memory.get(key)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        if self._client is not None:
            try:
                if self._ttl_seconds:
                    self._client.setex(key, self._ttl_seconds, value)
                else:
                    self._client.set(key, value)
                return
            except redis.RedisError as exc:
                self._switch_to_memory_fallback(exc)
        self._memory[key] = value
