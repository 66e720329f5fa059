"""Shared Redis client plumbing for Redis-backed DAOs

Both the durable Redis store and the ElastiCache cache talk to Redis through
the same client setup. They differ in what an unreachable server means:

    UrlMappingRedisDAO  -> fatal, the store is the source of truth
    UrlCacheRedisDAO    -> logged, the cache is optional

so the connectivity check reports a bool and lets the caller decide whether
to raise.

Example:
    >>> class UrlMappingRedisDAO(RedisClientMixin, UrlMappingBaseDAO):
    ...     pass
    >>> dao = UrlMappingRedisDAO(redis_host='redis.internal', prefix='linkvault:prod')
    >>> dao._healthcheck()
    True
"""

from typing import Optional

import redis
from redis.backoff import NoBackoff
from redis.retry import Retry

from linkvault.dao.redis.redis_key_schema import RedisKeySchema
from linkvault.dao.redis.helpers import redis_address
from linkvault.dao.exceptions import DataStoreError


UNREACHABLE_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def connect(
    host: str,
    port: int | str,
    db: int | str,
    *,
    decode_responses: bool = True,
    username: Optional[str] = None,
    password: Optional[str] = None,
    ssl: bool = False,
    socket_timeout: Optional[float] = None,
) -> redis.Redis:
    """Create a Redis client from AppConfig connection parameters

    Port and db may arrive as strings from JSON configuration. The same
    timeout bounds both connecting and every command. The client makes a
    single attempt per command: retries belong to the caller.
    """
    return redis.Redis(
        host=host,
        port=int(port),
        db=int(db),
        decode_responses=decode_responses,
        username=username,
        password=password,
        ssl=bool(ssl),
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_timeout,
        retry=Retry(NoBackoff(), 0),
    )


class RedisClientMixin:
    """Client setup and connectivity check for Redis-backed DAOs

    Attributes:
        redis (redis.Redis):
            Client used by the DAO for every command.
        keys (RedisKeySchema):
            Key naming helper, namespaced by `prefix`.

    Args:
        redis_host, redis_port, redis_db, redis_username, redis_password, redis_ssl:
            Connection parameters, ignored when `redis_client` is given.
        redis_decode_responses (bool):
            Return str instead of bytes. Defaults to True.
        redis_socket_timeout (Optional[float]):
            Connect and command timeout in seconds. None waits indefinitely.
        redis_client (Optional[redis.Redis]):
            Ready client (tests, shared connection pools).
        prefix (Optional[str]):
            Key namespace, e.g. 'linkvault:prod'.

    Raises:
        DataStoreError:
            If the server doesn't answer PING (see `_healthcheck`).
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_ssl: Optional[bool] = False,
        redis_socket_timeout: Optional[float] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        self.redis = redis_client if redis_client is not None else connect(
            redis_host,
            redis_port,
            redis_db,
            decode_responses=redis_decode_responses,
            username=redis_username,
            password=redis_password,
            ssl=redis_ssl,
            socket_timeout=redis_socket_timeout,
        )
        self.keys = RedisKeySchema(prefix=prefix)
        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING the server

        Returns:
            bool: True if Redis answered, False if it didn't and `raise_error` is False.

        Raises:
            DataStoreError:
                If Redis didn't answer and `raise_error` is True.
        """
        try:
            self.redis.ping()
        except UNREACHABLE_ERRORS as e:
            if not raise_error:
                return False
            raise DataStoreError(
                f"Can't connect to Redis at {redis_address(self.redis)}. Check the provided configuration parameters."
            ) from e
        return True
