"""Unit tests for the UrlCacheRedisDAO and NullUrlCacheDAO

Test coverage includes:

1. Initialization
   - Ensures cache keys are namespaced under 'cache:'.
   - Ensures an unreachable cache logs a warning instead of failing.
   - Ensures the client is created with a short socket timeout.
   - Ensures the client makes a single attempt per command.

2. Reads and writes
   - Ensures get() returns cached targets (str or bytes) and None on miss.
   - Ensures set() writes the target with the given TTL.
   - Ensures every Redis error surfaces as CacheError.
   - Ensures undecodable cached bytes surface as CacheError.
   - Ensures invalid types raise TypeError or BeartypeCallHintParamViolation.

3. Null cache
   - Ensures the null cache never holds anything.
"""

import logging
from unittest.mock import patch

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation

from linkvault.constants import Defaults
from linkvault.dao.cache import UrlCacheRedisDAO, NullUrlCacheDAO
from linkvault.dao.cache.constants import HOT_TTL
from linkvault.dao.exceptions import CacheError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def cache(redis_client, app_prefix):
    return UrlCacheRedisDAO(redis_client=redis_client, prefix=app_prefix)


# -------------------------------
# 1. Initialization
# -------------------------------


def test_initialization(cache, redis_client):
    assert cache.redis is redis_client
    assert cache.keys.link_url_key('abc123') == 'cache:testapp:test:links:abc123:url'


def test_initialization_with_unreachable_cache(redis_client, caplog):
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection refused')

    with caplog.at_level(logging.WARNING, logger='linkvault.dao.cache.url_cache_redis_dao'):
        cache = UrlCacheRedisDAO(redis_client=redis_client)

    assert cache.redis is redis_client
    assert 'Cache is unreachable. Continuing without it until it recovers.' in caplog.text


def test_initialization_without_redis_client():
    with patch('linkvault.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        UrlCacheRedisDAO(redis_host='cache.test')

    kwargs = redis_mock.call_args.kwargs
    assert kwargs['host'] == 'cache.test'
    assert kwargs['socket_timeout'] == Defaults.CACHE_SOCKET_TIMEOUT
    assert kwargs['socket_connect_timeout'] == Defaults.CACHE_SOCKET_TIMEOUT


def test_client_makes_single_attempt(monkeypatch):
    monkeypatch.setattr(redis.Redis, 'ping', lambda self: True)

    cache = UrlCacheRedisDAO(redis_host='cache.test')

    assert cache.redis.get_retry()._retries == 0
    assert cache.redis.connection_pool.connection_kwargs['socket_timeout'] == Defaults.CACHE_SOCKET_TIMEOUT


# -------------------------------
# 2. Reads and writes
# -------------------------------


@pytest.mark.parametrize('stored', ['https://example.com', b'https://example.com'])
def test_get(cache, redis_client, stored):
    redis_client.get.return_value = stored

    assert cache.get('abc123') == 'https://example.com'
    redis_client.get.assert_called_once_with('cache:testapp:test:links:abc123:url')


def test_get_miss(cache, redis_client):
    redis_client.get.return_value = None
    assert cache.get('abc123') is None


def test_set(cache, redis_client):
    cache.set('abc123', 'https://example.com', HOT_TTL)

    redis_client.set.assert_called_once_with('cache:testapp:test:links:abc123:url', 'https://example.com', ex=HOT_TTL)


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ConnectionError('Connection refused'),
        redis.exceptions.TimeoutError('Timeout reading from socket'),
        redis.exceptions.ResponseError('OOM command not allowed'),
    ],
)
def test_redis_errors_become_cache_errors(cache, redis_client, error):
    redis_client.get.side_effect = error
    redis_client.set.side_effect = error

    with pytest.raises(CacheError, match='Cache at redis.test:6379/0 failed'):
        cache.get('abc123')
    with pytest.raises(CacheError):
        cache.set('abc123', 'https://example.com', HOT_TTL)


def test_get_with_undecodable_value(cache, redis_client):
    redis_client.get.return_value = b'\xff\xfe'

    with pytest.raises(CacheError, match='Cache at redis.test:6379/0 failed'):
        cache.get('abc123')


def test_set_with_invalid_ttl_type(cache):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        cache.set('abc123', 'https://example.com', '3600')


# -------------------------------
# 3. Null cache
# -------------------------------


def test_null_cache():
    cache = NullUrlCacheDAO()
    cache.set('abc123', 'https://example.com', HOT_TTL)
    assert cache.get('abc123') is None
