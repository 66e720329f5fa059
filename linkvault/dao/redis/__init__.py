from linkvault.dao.redis.redis_key_schema import RedisKeySchema
from linkvault.dao.redis.mixins import RedisClientMixin
from linkvault.dao.redis.url_mapping_redis_dao import UrlMappingRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'UrlMappingRedisDAO',
]
