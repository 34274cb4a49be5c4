"""In-memory storage adapter"""

import asyncio
from typing import Any, Optional
from cachetools import TTLCache

from .base import StorageAdapter
from ..config import Config


class MemoryStorage(StorageAdapter):
    """In-memory TTL cache"""

    def __init__(self, config: Config, max_size: int = 10000):
        self.config = config
        self.cache: TTLCache[str, Any] = TTLCache(
            maxsize=max_size,
            ttl=config.cache_ttl,
        )
        self._lock = asyncio.Lock()

    async def get_cache(self, key: str) -> Optional[Any]:
        """Get cached value"""
        async with self._lock:
            return self.cache.get(key)

    async def set_cache(self, key: str, value: Any) -> None:
        """Set cached value"""
        async with self._lock:
            self.cache[key] = value
