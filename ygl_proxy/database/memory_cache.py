"""
In-memory response cache for the search endpoints.

Entries live for the lifetime of the process only. Expiry is checked when a
key is looked up; nothing sweeps the dict in the background, so a stream of
unique keys grows it without bound.
"""

from __future__ import annotations

import json
import time
from typing import Any, Callable, Dict, Optional, Tuple

DEFAULT_TTL_SECONDS = 120.0


def cache_key(path: str, body: Dict[str, Any]) -> str:
    return f"{path}::{json.dumps(body or {}, separators=(',', ':'), default=str)}"


class ResponseCache:
    def __init__(self, default_ttl: float = DEFAULT_TTL_SECONDS, clock: Optional[Callable[[], float]] = None) -> None:
        self.default_ttl = default_ttl
        self._clock = clock or time.monotonic
        # key -> (value, expires_at)
        self._entries: Dict[str, Tuple[Any, float]] = {}

    def lookup(self, key: str) -> Optional[Any]:
        item = self._entries.get(key)
        if item is None:
            return None
        value, expires_at = item
        if self._clock() > expires_at:
            self._entries.pop(key, None)
            return None
        return value

    def store(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        self._entries[key] = (value, self._clock() + (ttl if ttl is not None else self.default_ttl))

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
