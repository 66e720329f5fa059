"""Abstract base class for shortcode -> target URL caches.

The cache is a best-effort accelerator in front of the durable store. It
holds a subset of the durable mappings and is never consulted to decide
whether a mapping exists: a miss or a failure always falls back to the
durable store.

Example:
    >>> from linkvault.dao.cache import UrlCacheRedisDAO
    >>> cache = UrlCacheRedisDAO(redis_host='cache.internal', prefix='linkvault:dev')
    >>> cache.set('a1b2c3', 'https://example.com', ttl=3600)
    >>> cache.get('a1b2c3')
    'https://example.com'
    >>> cache.get('zzzzzz') is None
    True
"""

from abc import ABC, abstractmethod


class UrlCacheBaseDAO(ABC):
    """Interface for shortcode -> target URL caches.

    Methods:
        get(shortcode: str) -> str | None:
            Return the cached target URL, None on miss.
            Raises CacheError on failure.

        set(shortcode: str, target: str, ttl: int) -> None:
            Cache a target URL for `ttl` seconds.
            Raises CacheError on failure.
    """

    @abstractmethod
    def get(self, shortcode: str) -> str | None:
        """Return the cached target URL for a shortcode, or None on miss.

        Raises:
            CacheError: If the cache can't be read.
        """
        pass

    @abstractmethod
    def set(self, shortcode: str, target: str, ttl: int) -> None:
        """Cache the target URL of a shortcode for `ttl` seconds.

        Raises:
            CacheError: If the cache can't be written.
        """
        pass
