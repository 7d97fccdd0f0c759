import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Hashable, Optional, Tuple


class TTLCache:
    """
    In-memory cache of query results with a fixed time to live.

    Keys are tuples whose second element is the ticker symbol, so every
    entry of a symbol can be dropped after it was synchronized.
    """

    def __init__(self, ttl_seconds: int = 900):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._entries: Dict[Tuple[Hashable, ...], Tuple[datetime, Any]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: Tuple[Hashable, ...]) -> Optional[Any]:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if datetime.now(timezone.utc) >= expires_at:
                del self._entries[key]
                return None
            return value

    async def set(self, key: Tuple[Hashable, ...], value: Any) -> None:
        if self.ttl.total_seconds() <= 0:
            return
        async with self._lock:
            self._entries[key] = (datetime.now(timezone.utc) + self.ttl, value)

    async def invalidate_symbol(self, symbol: str) -> int:
        async with self._lock:
            stale = [key for key in self._entries if len(key) > 1 and key[1] == symbol]
            for key in stale:
                del self._entries[key]
            return len(stale)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
