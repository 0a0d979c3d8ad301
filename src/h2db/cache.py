"""
Caching for schema metadata.

Strategy methods that read slowly changing catalog data (primary keys) are
cached per strategy class with cachetools TTLCache. DDL issued through a
strategy clears the entries of the table it touched.
"""
import functools
import logging
import threading

import cachetools

logger = logging.getLogger(__name__)


class Cache:
    """Cache manager for the h2db module.

    Thread-safe singleton that manages all TTL caches.
    """

    _instance = None
    _caches: dict[str, cachetools.TTLCache] = {}
    _lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> 'Cache':
        """Get singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def get_cache(self, name: str, maxsize: int = 100, ttl: int = 300) -> cachetools.TTLCache:
        """Get or create a TTL cache with the given name.

        Args:
            name: Name of the cache
            maxsize: Maximum cache size
            ttl: Time-to-live in seconds

        Returns
            TTLCache instance
        """
        if name not in self._caches:
            with self._lock:
                if name not in self._caches:
                    self._caches[name] = cachetools.TTLCache(maxsize=maxsize, ttl=ttl)
        return self._caches[name]

    def clear_all(self) -> None:
        """Clear all managed caches."""
        with self._lock:
            for cache in self._caches.values():
                cache.clear()

    def clear_cache(self, name: str) -> None:
        """Clear a specific cache by name."""
        with self._lock:
            if name in self._caches:
                self._caches[name].clear()

    def clear_for_table(self, table_name: str) -> None:
        """Clear all cache entries related to a specific table.
        """
        table_lower = table_name.lower()
        with self._lock:
            for name, cache in self._caches.items():
                keys_to_clear = [
                    key for key in list(cache.keys())
                    if table_lower in str(key).lower()
                ]
                for key in keys_to_clear:
                    if key in cache:
                        del cache[key]
                        logger.debug(f'Cleared cache entry {key} for table {table_name}')


def _create_cache_key(key: str, method_args: tuple, method_kwargs: dict) -> str:
    """Create a deterministic cache key from arguments.

    Excludes connection objects (detected by cursor/dbapi_connection attributes).
    """
    args_str = ':'.join(
        repr(arg) for arg in method_args
        if not hasattr(arg, 'cursor') and not hasattr(arg, 'dbapi_connection')
    )

    kwargs_str = ':'.join(
        f'{k}={repr(v)}' for k, v in sorted(method_kwargs.items())
        if k != 'bypass_cache'
        and not hasattr(v, 'cursor')
        and not hasattr(v, 'dbapi_connection')
    )

    return f'{key}:{args_str}:{kwargs_str}'.lower()


def cacheable_strategy(cache_name: str, ttl: int = 300, maxsize: int = 50):
    """Decorator for caching strategy method results.

    The wrapped method takes ``(self, cn, *args, bypass_cache=False)``.
    Results are keyed by the connection's schema and the remaining
    arguments. ``bypass_cache=True`` queries the database directly. The
    method must return a list; callers always get a fresh copy.

    Args:
        cache_name: Base name for the cache
        ttl: Time-to-live in seconds
        maxsize: Maximum cache size
    """
    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, cn, *args, bypass_cache=False, **kwargs):
            if bypass_cache:
                logger.debug(f'Bypassing cache for {method.__name__}{args}')
                return method(self, cn, *args, **kwargs)

            strategy_class = self.__class__.__name__
            specific_cache_name = f'{cache_name}_{strategy_class}_{method.__name__}'

            cache = Cache.get_instance().get_cache(specific_cache_name, ttl=ttl, maxsize=maxsize)
            cache_key = _create_cache_key(self.schema_name(cn), args, kwargs)

            if cache_key in cache:
                logger.debug(f'Cache hit for {method.__name__}{args}')
                return list(cache[cache_key])

            logger.debug(f'Cache miss for {method.__name__}{args}')
            result = method(self, cn, *args, **kwargs)
            cache[cache_key] = tuple(result)
            return list(result)

        return wrapper
    return decorator
