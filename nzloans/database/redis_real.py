"""
Real Redis-backed key-value store for production when REDIS_URL is set.
Implements the same interface as nzloans.database.storage (in-memory stub).
"""

from __future__ import annotations

from typing import Any, Optional

import redis

from nzloans.error_handler import StorageError
from nzloans.integrations.contracts.interfaces import KeyValueStore


class RedisKeyValueStore(KeyValueStore):
    """
    Redis-backed store. Keys are namespaced with ``prefix`` so several sites
    can share one Redis database.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        prefix: str = "nzloans:",
        ttl: Optional[int] = None,
        client: Any = None,
    ) -> None:
        if client is None and not url:
            raise ValueError("RedisKeyValueStore needs a url or a client")
        self._client = client or redis.from_url(url, decode_responses=True)
        self._prefix = prefix
        self._ttl = ttl

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get_item(self, key: str) -> Optional[str]:
        try:
            return self._client.get(self._key(key))
        except redis.RedisError as exc:
            raise StorageError(f"Redis read failed for {key}: {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        try:
            if self._ttl:
                self._client.setex(self._key(key), self._ttl, value)
            else:
                self._client.set(self._key(key), value)
        except redis.RedisError as exc:
            raise StorageError(f"Redis write failed for {key}: {exc}") from exc

    def remove_item(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except redis.RedisError as exc:
            raise StorageError(f"Redis delete failed for {key}: {exc}") from exc

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False
