from .cache import CacheConfig, CacheEntry, MemoryCache, QueryCache, RedisCache, make_cache

__all__ = ["CacheConfig", "CacheEntry", "MemoryCache", "QueryCache", "RedisCache", "make_cache"]
