from linkvault.dao.redis.redis_key_schema import RedisKeySchema


__all__ = ['CacheKeySchema']


class CacheKeySchema(RedisKeySchema):
    """Build Redis keys for cached lookups

    Every key lives under a leading 'cache' segment, so cache entries never
    collide with durable store keys when both share one Redis.

    Example:
        >>> CacheKeySchema(prefix='linkvault:dev').link_url_key('abc123')
        'cache:linkvault:dev:links:abc123:url'
        >>> CacheKeySchema().link_url_key('abc123')
        'cache:links:abc123:url'
    """

    def __init__(self, prefix: str | None = None):
        super().__init__(prefix=prefix)
        self.prefix = 'cache' if prefix is None else f'cache:{prefix}'

    def link_url_key(self, shortcode: str) -> str:
        return self._key('links', shortcode, 'url')
