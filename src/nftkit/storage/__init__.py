"""Storage adapters for caching fetched metadata documents"""

from typing import Optional

from .base import StorageAdapter
from .memory import MemoryStorage
from .redis_adapter import RedisStorage

__all__ = ["MemoryStorage", "RedisStorage", "StorageAdapter", "get_storage_adapter"]


def get_storage_adapter(config) -> Optional[StorageAdapter]:
    """Get appropriate storage adapter based on config, or None when caching is off"""
    if config.cache_type == "none":
        return None
    if config.cache_type == "redis" and config.redis_url:
        return RedisStorage(config)
    return MemoryStorage(config)
