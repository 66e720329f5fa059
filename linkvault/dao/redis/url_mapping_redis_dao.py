"""Durable store implementation for URL mappings in Redis

This module provides a Redis-based implementation of UrlMappingBaseDAO. It is
the alternative to the DynamoDB backend for deployments where a persistent
Redis (AOF/replicated) is the system of record.

Each mapping lives under a single key holding its JSON item:

    <prefix>:links:<shortcode>  ->  {"shortcode": ..., "target": ..., "created_at": ...}

Classes:
    UrlMappingRedisDAO:
        DAO for storing and retrieving UrlMapping in a Redis datastore.

Example:
    >>> from linkvault.models import UrlMapping
    >>> from linkvault.dao.redis import UrlMappingRedisDAO

    >>> dao = UrlMappingRedisDAO(prefix="linkvault:dev")
    >>> dao.put_if_absent(UrlMapping(shortcode="abc123", target="https://example.com/page"))
    <PutResult.CREATED: 'created'>
    >>> dao.get("abc123").target
    'https://example.com/page'
"""

import json
from typing import Any

from beartype import beartype

from linkvault.constants import Defaults
from linkvault.models import UrlMapping
from linkvault.dao.base import UrlMappingBaseDAO, PutResult
from linkvault.dao.redis.mixins import RedisClientMixin
from linkvault.dao.redis.helpers import handle_redis_errors
from linkvault.dao.exceptions import DataStoreError


class UrlMappingRedisDAO(RedisClientMixin, UrlMappingBaseDAO):
    """Redis-based durable store for URL mappings

    Accepts the same arguments as RedisClientMixin. The socket timeout
    defaults to the store read timeout so a stalled server surfaces as a
    retryable timeout instead of blocking the invocation.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        put_if_absent(mapping: UrlMapping, **kwargs) -> PutResult:
            Store a mapping via SET NX. Never overwrites an existing shortcode.

        get(shortcode: str, **kwargs) -> UrlMapping | None:
            Retrieve a mapping by shortcode, None if absent.
    """

    def __init__(
        self,
        *args: Any,
        redis_socket_timeout: float | None = Defaults.STORE_READ_TIMEOUT,
        **kwargs: Any,
    ):
        super().__init__(*args, redis_socket_timeout=redis_socket_timeout, **kwargs)

    @handle_redis_errors
    @beartype
    def put_if_absent(self, mapping: UrlMapping, **kwargs) -> PutResult:
        """Insert a mapping into Redis unless its shortcode is taken

        SET with NX checks and writes in one atomic command, so two concurrent
        inserts of the same shortcode can't both succeed.

        Args:
            mapping (UrlMapping):
                The mapping to insert.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            PutResult: CREATED or ALREADY_EXISTS.

        Raises:
            TransientDataStoreError:
                On Redis connection drops or timeouts.
            DataStoreError:
                On any other Redis error.

        Example:
            >>> dao.put_if_absent(UrlMapping(shortcode='abc123', target='https://example.com'))
            <PutResult.CREATED: 'created'>
        """
        link_key = self.keys.link_key(mapping.shortcode)
        payload = json.dumps(mapping.to_item(), separators=(',', ':'), ensure_ascii=False)

        created = self.redis.set(link_key, payload, nx=True)
        return PutResult.CREATED if created else PutResult.ALREADY_EXISTS

    @handle_redis_errors
    @beartype
    def get(self, shortcode: str, **kwargs) -> UrlMapping | None:
        """Retrieve a stored mapping by shortcode

        Args:
            shortcode (str):
                The shortcode identifier of the mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            UrlMapping | None: The mapping if found, otherwise None.

        Raises:
            TransientDataStoreError:
                On Redis connection drops or timeouts.
            DataStoreError:
                On any other Redis error, or if the stored item is malformed.

        Example:
            >>> dao.get('abc123')
            UrlMapping(shortcode='abc123', target='https://example.com', created_at=...)
        """
        link_key = self.keys.link_key(shortcode)
        blob = self.redis.get(link_key)
        if blob is None:
            return None

        try:
            return UrlMapping.from_item(json.loads(blob))
        except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
            raise DataStoreError(f"Malformed mapping stored under '{link_key}'.") from e
