from linkvault.dao.cache.cache_key_schema import CacheKeySchema
from linkvault.dao.cache.url_cache_redis_dao import UrlCacheRedisDAO
from linkvault.dao.cache.null_cache_dao import NullUrlCacheDAO

__all__ = [
    'CacheKeySchema',
    'UrlCacheRedisDAO',
    'NullUrlCacheDAO',
]
