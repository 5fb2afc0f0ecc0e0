"""
Lightweight in-memory key-value store for local development.

This implements the same interface as nzloans.database.redis_real so the
click tracker can run without a real Redis instance. Values live only as long
as the process.
"""

from __future__ import annotations

from typing import Dict, Optional

from nzloans.integrations.contracts.interfaces import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def ping(self) -> bool:
        """Always True so health checks report storage as available in dev mode."""
        return True
