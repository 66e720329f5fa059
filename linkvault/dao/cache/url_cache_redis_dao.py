"""Redis (ElastiCache) backed cache for shortcode -> target URL lookups

The cache only ever accelerates reads. It is populated after successful
creates and after durable reads, and every failure surfaces as CacheError so
callers can log and move on to the durable store.

Keys (TTL applied on every write):
    cache:<prefix>:links:<shortcode>:url  ->  target URL (string)

Classes:
    UrlCacheRedisDAO:
        Concrete cache DAO backed by Redis. Uses RedisClientMixin to initialize
        the Redis client and assigns CacheKeySchema for key generation.

Example:
    >>> cache = UrlCacheRedisDAO(redis_host='cache.internal', prefix='linkvault:dev')
    >>> cache.set('abc123', 'https://example.com', ttl=HOT_TTL)
    >>> cache.get('abc123')
    'https://example.com'
"""

import logging
from typing import Any

from beartype import beartype

from linkvault.constants import Defaults
from linkvault.dao.base import UrlCacheBaseDAO
from linkvault.dao.cache.cache_key_schema import CacheKeySchema
from linkvault.dao.redis.mixins import RedisClientMixin
from linkvault.dao.redis.helpers import handle_cache_errors, redis_address


logger = logging.getLogger(__name__)


class UrlCacheRedisDAO(RedisClientMixin, UrlCacheBaseDAO):
    """Redis-backed best-effort cache of target URLs

    Accepts the same arguments as RedisClientMixin. The socket timeout
    defaults to a short value so a slow cache can't eat the caller's
    latency budget.

    Attributes (via mixins):
        redis (redis.Redis):
            Redis client used to communicate with the ElastiCache/Redis datastore.
        keys (CacheKeySchema):
            Key schema helper for generating namespaced cache keys.
    """

    def __init__(
        self,
        *args: Any,
        prefix: str | None = None,
        redis_socket_timeout: float | None = Defaults.CACHE_SOCKET_TIMEOUT,
        **kwargs: Any,
    ):
        super().__init__(*args, redis_socket_timeout=redis_socket_timeout, prefix=prefix, **kwargs)
        self.keys = CacheKeySchema(prefix=prefix)

    def _healthcheck(self, raise_error: bool = False) -> bool:
        # An unreachable cache must never prevent startup; redis-py reconnects lazily
        healthy = super()._healthcheck(raise_error=raise_error)
        if not healthy:
            logger.warning('Cache is unreachable. Continuing without it until it recovers.', extra={'cache': redis_address(self.redis)})
        return healthy

    @handle_cache_errors
    @beartype
    def get(self, shortcode: str) -> str | None:
        """Return the cached target URL for a shortcode

        Args:
            shortcode (str):
                The shortcode to look up.

        Returns:
            str | None: Cached target URL, None on cache miss.

        Raises:
            CacheError:
                On any Redis error (connection, timeout, etc.) or undecodable value.
        """
        target = self.redis.get(self.keys.link_url_key(shortcode))
        if isinstance(target, bytes):
            target = target.decode('utf-8')
        return target

    @handle_cache_errors
    @beartype
    def set(self, shortcode: str, target: str, ttl: int) -> None:
        """Cache the target URL of a shortcode

        Args:
            shortcode (str):
                The shortcode to cache.
            target (str):
                Target URL the shortcode resolves to.
            ttl (int):
                Seconds until Redis may evict the entry.

        Raises:
            CacheError:
                On any Redis error (connection, timeout, etc.) or undecodable value.
        """
        self.redis.set(self.keys.link_url_key(shortcode), target, ex=ttl)
