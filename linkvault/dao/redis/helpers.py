import functools

import redis

from linkvault.dao.exceptions import CacheError, DataStoreError, TransientDataStoreError


__all__ = []


def redis_address(client: redis.Redis) -> str:
    """Return '<host>:<port>/<db>' of a Redis client for error messages"""
    pool = getattr(client, 'connection_pool', None)
    info = getattr(pool, 'connection_kwargs', None) or {}
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_errors[F](method: F) -> F:
    """Wrap Redis-interacting durable store methods to translate Redis errors

    Connection drops and timeouts are worth retrying and become
    TransientDataStoreError. Any other Redis error becomes DataStoreError.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises TransientDataStoreError or DataStoreError instead.

    Example:
        >>> @handle_redis_errors
        ... def get(self, shortcode):
        ...     return self.redis.get(self.keys.link_key(shortcode))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.ConnectionError as e:
            raise TransientDataStoreError(f"Can't connect to Redis at {redis_address(self.redis)}.") from e
        except redis.exceptions.TimeoutError as e:
            raise TransientDataStoreError(f'Redis at {redis_address(self.redis)} timed out.') from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis at {redis_address(self.redis)} failed: {e}') from e

    return wrapper


def handle_cache_errors[F](method: F) -> F:
    """Wrap Redis-interacting cache methods so every Redis error becomes CacheError

    Undecodable cached bytes count as a cache failure too.

    Example:
        >>> @handle_cache_errors
        ... def get(self, shortcode):
        ...     return self.redis.get(self.keys.link_url_key(shortcode))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.RedisError, UnicodeDecodeError) as e:
            raise CacheError(f'Cache at {redis_address(self.redis)} failed: {e}') from e

    return wrapper
