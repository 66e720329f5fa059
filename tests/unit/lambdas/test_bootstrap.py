"""Unit tests for the process-wide service construction in bootstrap.py

Test coverage includes:

1. Durable store selection
   - Ensures 'dynamodb' and 'redis' backends build the matching DAO.
   - Ensures unknown backend parameters raise BadConfigurationError.

2. Cache selection
   - Ensures a disabled cache yields NullUrlCacheDAO.
   - Ensures an enabled cache yields UrlCacheRedisDAO with the app prefix.

3. Service wiring
   - Ensures settings flow into the service.
   - Ensures mapping_service() builds once per lambda and reuses the instance.
"""

from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from linkvault.lambdas import bootstrap
from linkvault.dao.cache import NullUrlCacheDAO
from linkvault.exceptions import BadConfigurationError
from linkvault.services import UrlMappingService
from linkvault.utils.config import ServiceSettings
from linkvault.utils.retry import RetryPolicy


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def config() -> dict:
    return {
        'active_backend': 'dynamodb',
        'dynamodb': {'table_name': 'linkvault-links', 'region_name': 'eu-central-1'},
        'cache': {'enabled': True, 'host': 'cache.test', 'port': 6379, 'ttl': 600},
        'service': {'shortcode_length': 8, 'max_create_attempts': 3, 'retry': {'total': 1}},
    }


@pytest.fixture
def dynamodb_dao(monkeypatch: MonkeyPatch) -> MagicMock:
    dao = MagicMock(name='UrlMappingDynamoDBDAO')
    monkeypatch.setattr(bootstrap, 'UrlMappingDynamoDBDAO', dao)
    return dao


@pytest.fixture
def redis_dao(monkeypatch: MonkeyPatch) -> MagicMock:
    dao = MagicMock(name='UrlMappingRedisDAO')
    monkeypatch.setattr(bootstrap, 'UrlMappingRedisDAO', dao)
    return dao


@pytest.fixture
def cache_dao(monkeypatch: MonkeyPatch) -> MagicMock:
    dao = MagicMock(name='UrlCacheRedisDAO')
    monkeypatch.setattr(bootstrap, 'UrlCacheRedisDAO', dao)
    return dao


# -------------------------------
# 1. Durable store selection
# -------------------------------


def test_build_dynamodb_store(dynamodb_dao, redis_dao, config):
    store = bootstrap.build_mapping_store(ServiceSettings.from_config(config), prefix='linkvault:test')

    assert store is dynamodb_dao.return_value
    dynamodb_dao.assert_called_once_with(table_name='linkvault-links', region_name='eu-central-1')
    redis_dao.assert_not_called()


def test_build_redis_store(dynamodb_dao, redis_dao):
    settings = ServiceSettings.from_config({'active_backend': 'redis', 'redis': {'host': 'redis.test', 'port': 6379, 'db': 0}})

    store = bootstrap.build_mapping_store(settings, prefix='linkvault:test')

    assert store is redis_dao.return_value
    redis_dao.assert_called_once_with(redis_host='redis.test', redis_port=6379, redis_db=0, prefix='linkvault:test')
    dynamodb_dao.assert_not_called()


def test_build_store_with_unknown_parameter(config):
    config['dynamodb']['capacity'] = 'on-demand'

    with pytest.raises(BadConfigurationError, match="Invalid 'dynamodb' configuration"):
        bootstrap.build_mapping_store(ServiceSettings.from_config(config))


# -------------------------------
# 2. Cache selection
# -------------------------------


def test_build_disabled_cache(cache_dao, config):
    config['cache']['enabled'] = False

    cache = bootstrap.build_url_cache(ServiceSettings.from_config(config))

    assert isinstance(cache, NullUrlCacheDAO)
    cache_dao.assert_not_called()


def test_build_enabled_cache(cache_dao, config):
    cache = bootstrap.build_url_cache(ServiceSettings.from_config(config), prefix='linkvault:test')

    assert cache is cache_dao.return_value
    cache_dao.assert_called_once_with(redis_host='cache.test', redis_port=6379, prefix='linkvault:test')


# -------------------------------
# 3. Service wiring
# -------------------------------


def test_build_mapping_service(dynamodb_dao, cache_dao, config):
    service = bootstrap.build_mapping_service(config, prefix='linkvault:test')

    assert isinstance(service, UrlMappingService)
    assert service.store is dynamodb_dao.return_value
    assert service.cache is cache_dao.return_value
    assert service.generator.length == 8
    assert service.max_attempts == 3
    assert service.cache_ttl == 600
    assert service.retry_policy == RetryPolicy(total=1)


def test_mapping_service_is_built_once_per_lambda(monkeypatch: MonkeyPatch, config):
    load_config = MagicMock(return_value=config)
    build_mapping_service = MagicMock(side_effect=lambda *a, **kw: MagicMock(spec=UrlMappingService))
    monkeypatch.setattr(bootstrap, 'load_config', load_config)
    monkeypatch.setattr(bootstrap, 'build_mapping_service', build_mapping_service)
    monkeypatch.setattr(bootstrap, 'app_prefix', lambda: 'linkvault:test')
    bootstrap.mapping_service.cache_clear()

    try:
        first = bootstrap.mapping_service('shorten_url')
        second = bootstrap.mapping_service('shorten_url')
        other = bootstrap.mapping_service('redirect_url')
    finally:
        bootstrap.mapping_service.cache_clear()

    assert first is second
    assert first is not other
    assert load_config.call_count == 2
    build_mapping_service.assert_any_call(config, prefix='linkvault:test')


def test_mapping_service_retries_failed_builds(monkeypatch: MonkeyPatch, config):
    service = MagicMock(spec=UrlMappingService)
    load_config = MagicMock(side_effect=[BadConfigurationError('broken'), config])
    monkeypatch.setattr(bootstrap, 'load_config', load_config)
    monkeypatch.setattr(bootstrap, 'build_mapping_service', MagicMock(return_value=service))
    bootstrap.mapping_service.cache_clear()

    try:
        with pytest.raises(BadConfigurationError):
            bootstrap.mapping_service('shorten_url')
        assert bootstrap.mapping_service('shorten_url') is service
    finally:
        bootstrap.mapping_service.cache_clear()
